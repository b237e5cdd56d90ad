"""
Lua asset manifest generation.

The manifest declares every image the runtime asset loader must know
about, one ``image{ ... }`` table per line, in four fixed sections.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from ..discovery import MapImageSet
from ..naming import AssetCategory, decl_name, map_decl_name

GENERATED_HEADER = "-- GENERATED BY MAPTOOL, DO NOT EDIT BY HAND"
MAP_SECTION = "-- MAP IMAGES"
NPC_SECTION = "-- NPC IMAGES"
DETAIL_SECTION = "-- DIALOG DETAIL IMAGES"

TILE_ATLAS_SIZE = 16
BLANK_SIZE = 128
PORTRAIT_SIZE = 32


def lua_string(value: str) -> str:
    """Quote a value as a Lua string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


@dataclass(frozen=True)
class ImageDeclaration:
    """One image declaration of the manifest.

    Attributes:
        name: Lua identifier, e.g. ``TileSet_castle``
        path: Image path as the asset loader sees it
        width: Fixed frame width, None to let the loader use the image size
        height: Fixed frame height, None to let the loader use the image size
        pinned: Keep the image resident instead of loading it lazily
    """

    name: str
    path: str
    width: Optional[int] = None
    height: Optional[int] = None
    pinned: bool = False

    def render(self) -> str:
        """Render as a Lua assignment, without trailing newline."""
        fields = [lua_string(self.path)]
        if self.width is not None and self.height is not None:
            fields.append(f"width={self.width}")
            fields.append(f"height={self.height}")
        if self.pinned:
            fields.append("pinned=true")
        return f"{self.name} = image{{ {', '.join(fields)} }}"


def map_declarations(images: MapImageSet) -> list[ImageDeclaration]:
    """Declarations for one map: tileset, overlay if present, then blank."""
    declarations = [
        ImageDeclaration(
            name=map_decl_name(AssetCategory.TILESET, images.map_name),
            path=images.tileset,
            width=TILE_ATLAS_SIZE,
            height=TILE_ATLAS_SIZE,
        )
    ]
    if images.overlay is not None:
        declarations.append(
            ImageDeclaration(
                name=map_decl_name(AssetCategory.OVERLAY, images.map_name),
                path=images.overlay,
                width=TILE_ATLAS_SIZE,
                height=TILE_ATLAS_SIZE,
            )
        )
    declarations.append(
        ImageDeclaration(
            name=map_decl_name(AssetCategory.BLANK, images.map_name),
            path=images.blank,
            width=BLANK_SIZE,
            height=BLANK_SIZE,
        )
    )
    return declarations


def portrait_declaration(path: str) -> ImageDeclaration:
    return ImageDeclaration(
        name=decl_name(AssetCategory.NPC, path),
        path=path,
        width=PORTRAIT_SIZE,
        height=PORTRAIT_SIZE,
        pinned=True,
    )


def detail_declaration(path: str) -> ImageDeclaration:
    return ImageDeclaration(name=decl_name(AssetCategory.DETAIL, path), path=path)


class ManifestEmitter:
    """Writes the Lua asset manifest.

    Output depends only on its inputs and always uses ``\\n`` line endings,
    so identical inputs give byte-identical manifests.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def emit(
        self,
        writer: TextIO,
        map_images: Iterable[MapImageSet],
        portrait_paths: Iterable[str],
        detail_paths: Iterable[str],
    ) -> int:
        """Write the complete manifest.

        Args:
            writer: Destination stream
            map_images: Validated images of every map, in discovery order
            portrait_paths: NPC portrait images from the dialog catalog
            detail_paths: Dialog detail images from the dialog catalog

        Returns:
            Number of declarations written
        """
        count = 0
        writer.write(f"{GENERATED_HEADER}\n")

        writer.write(f"\n{MAP_SECTION}\n")
        for images in map_images:
            count += self._write_all(writer, map_declarations(images))

        writer.write(f"\n{NPC_SECTION}\n")
        count += self._write_all(writer, (portrait_declaration(path) for path in portrait_paths))

        writer.write(f"\n{DETAIL_SECTION}\n")
        count += self._write_all(writer, (detail_declaration(path) for path in detail_paths))

        self.logger.debug(f"Manifest holds {count} image declaration(s)")
        return count

    @staticmethod
    def _write_all(writer: TextIO, declarations: Iterable[ImageDeclaration]) -> int:
        count = 0
        for declaration in declarations:
            writer.write(declaration.render() + "\n")
            count += 1
        return count
