"""
Naming conventions shared by discovery and the emitters.

Pure string functions: no file-system access, so they can be tested in
isolation from any directory layout.
"""

from enum import Enum
from pathlib import PurePath
from typing import Union

PNG_SUFFIX = ".png"
OVERLAY_SUFFIX = "_overlay"
BLANK_SUFFIX = "_blank"


class AssetCategory(Enum):
    """Declaration prefix for each kind of image in the manifest."""

    TILESET = "TileSet"
    OVERLAY = "Overlay"
    BLANK = "Blank"
    NPC = "NPC"
    DETAIL = "DETAIL"


def strip_png(path: str) -> str:
    """Return ``path`` without its ``.png`` suffix.

    Raises:
        ValueError: If the path does not end in ``.png``
    """
    if not path.endswith(PNG_SUFFIX):
        raise ValueError(f"Expected a {PNG_SUFFIX} path, got {path!r}")
    return path[: -len(PNG_SUFFIX)]


def decl_name(category: AssetCategory, path: str) -> str:
    """Build the manifest identifier for an image path.

    Example:
        >>> decl_name(AssetCategory.NPC, "hero.png")
        'NPC_hero'
    """
    return f"{category.value}_{strip_png(path)}"


def map_name_for(path: Union[str, PurePath]) -> str:
    """Map name of a source file: its base filename without extension."""
    return PurePath(path).stem


def tileset_image_for(map_name: str) -> str:
    return f"{map_name}{PNG_SUFFIX}"


def overlay_image_for(map_name: str) -> str:
    return f"{map_name}{OVERLAY_SUFFIX}{PNG_SUFFIX}"


def blank_image_for(map_name: str) -> str:
    return f"{map_name}{BLANK_SUFFIX}{PNG_SUFFIX}"


def map_decl_name(category: AssetCategory, map_name: str) -> str:
    """Manifest identifier of one of a map's images, e.g. ``Blank_castle``."""
    return f"{category.value}_{map_name}"
