"""
Discovery of map sources and validation of their companion images.

Every map ``<name>.tmx`` implies up to three images next to it:

* ``<name>.png`` - the tile atlas (required)
* ``<name>_overlay.png`` - overlay atlas (optional)
* ``<name>_blank.png`` - blank room background (required, used by the
  runtime when rendering map transitions)

Images are only checked for existence here, never opened.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .errors import DuplicateMapError, MissingAssetError
from .naming import blank_image_for, map_name_for, overlay_image_for, tileset_image_for

logger = logging.getLogger(__name__)

MAP_EXTENSION = ".tmx"


@dataclass(frozen=True)
class SourceFile:
    """A map-editor export found on disk."""

    path: Path

    @property
    def name(self) -> str:
        """Map name: base file name without extension."""
        return map_name_for(self.path)


@dataclass(frozen=True)
class MapImageSet:
    """Validated images of one map, as paths relative to the manifest.

    Attributes:
        map_name: Name of the map the images belong to
        tileset: Tile atlas image
        blank: Blank room image
        overlay: Overlay atlas image, None when the map has none
    """

    map_name: str
    tileset: str
    blank: str
    overlay: Optional[str] = None


def discover_source_files(directory: Path, extension: str = MAP_EXTENSION) -> list[SourceFile]:
    """List map-editor exports in a directory (non-recursive).

    Files are returned sorted by name so that generated output does not
    depend on the file system's listing order.

    Args:
        directory: Directory to scan
        extension: File extension to match, including the dot

    Returns:
        Discovered source files

    Raises:
        DuplicateMapError: If two files give the same map name, e.g.
            ``castle.tmx`` and ``castle.TMX``
    """
    sources = [
        SourceFile(path)
        for path in sorted(directory.iterdir(), key=lambda p: p.name)
        if path.is_file() and path.suffix.lower() == extension.lower()
    ]

    seen: dict[str, Path] = {}
    for source in sources:
        other = seen.setdefault(source.name, source.path)
        if other != source.path:
            raise DuplicateMapError(
                source.name, f"found in both {other.name} and {source.path.name}"
            )

    logger.info(f"Found {len(sources)} map file(s) in {directory}")
    return sources


def check_map_images(
    directory: Path, source: SourceFile, relative_to: Optional[Path] = None
) -> MapImageSet:
    """Validate the companion images of one map.

    Args:
        directory: Directory holding the map and its images
        source: Map whose images are checked
        relative_to: Directory the returned paths are relative to
            (default: ``directory``)

    Returns:
        The map's image set

    Raises:
        MissingAssetError: Naming every required image that is absent
    """
    name = source.name
    tileset = tileset_image_for(name)
    overlay = overlay_image_for(name)
    blank = blank_image_for(name)

    missing = [image for image in (tileset, blank) if not (directory / image).is_file()]
    if missing:
        raise MissingAssetError(name, missing)

    has_overlay = (directory / overlay).is_file()
    logger.debug(f"Map '{name}' images ok (overlay: {has_overlay})")

    return MapImageSet(
        map_name=name,
        tileset=_relative(directory / tileset, relative_to or directory),
        blank=_relative(directory / blank, relative_to or directory),
        overlay=_relative(directory / overlay, relative_to or directory) if has_overlay else None,
    )


def collect_map_images(
    directory: Path, sources: Iterable[SourceFile], relative_to: Optional[Path] = None
) -> list[MapImageSet]:
    """Validate the images of every map, in discovery order.

    Fails on the first map with a missing required image.
    """
    return [check_map_images(directory, source, relative_to) for source in sources]


def _relative(path: Path, base: Path) -> str:
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()
