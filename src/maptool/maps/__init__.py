"""Game map models, building and registration."""

from .models import (
    TILE_SIZE,
    ROOM_TILES,
    EMPTY_TILE,
    Serializable,
    Portal,
    Map,
)
from .builder import MapBuilder
from .registry import MapRegistry

__all__ = [
    "TILE_SIZE",
    "ROOM_TILES",
    "EMPTY_TILE",
    "Serializable",
    "Portal",
    "Map",
    "MapBuilder",
    "MapRegistry",
]
