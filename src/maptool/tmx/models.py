"""
Data models for parsed Tiled scenes.

A Scene is the structured, engine-agnostic content of one ``.tmx`` file.
The models hold data only; interpretation for the game happens in
``maptool.maps.builder``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Tiled stores flip/rotation flags in the top four bits of every gid
GID_MASK = 0x0FFFFFFF


@dataclass
class TilesetRef:
    """A tileset referenced by a map, embedded or loaded from a ``.tsx`` file.

    Attributes:
        first_gid: Global id of the first tile in this tileset
        name: Tileset name from the editor
        tile_width: Width of one tile in pixels
        tile_height: Height of one tile in pixels
        image_source: Atlas image path, relative to the map file
        image_width: Atlas width in pixels as recorded by the editor
        image_height: Atlas height in pixels as recorded by the editor
        tile_count: Number of tiles, when recorded
        columns: Atlas columns, when recorded
    """

    first_gid: int
    name: str
    tile_width: int
    tile_height: int
    image_source: Optional[str] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    tile_count: Optional[int] = None
    columns: Optional[int] = None


@dataclass
class TileLayer:
    """A grid of global tile ids, row-major, with flip flags removed.

    A gid of 0 marks an empty cell.
    """

    name: str
    width: int
    height: int
    gids: list[int] = field(default_factory=lambda: [])


@dataclass
class SceneObject:
    """A marker placed on an object layer (portal, trigger, spawn, ...)."""

    id: int
    name: str
    type: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    properties: dict[str, str] = field(default_factory=lambda: {})


@dataclass
class ObjectGroup:
    name: str
    objects: list[SceneObject] = field(default_factory=lambda: [])


@dataclass
class Scene:
    """Parsed content of one map-editor export file."""

    path: Path
    width: int
    height: int
    tile_width: int
    tile_height: int
    orientation: str = "orthogonal"
    tilesets: list[TilesetRef] = field(default_factory=lambda: [])
    layers: list[TileLayer] = field(default_factory=lambda: [])
    object_groups: list[ObjectGroup] = field(default_factory=lambda: [])
    properties: dict[str, str] = field(default_factory=lambda: {})

    @property
    def name(self) -> str:
        """Map name: the file name without extension."""
        return self.path.stem

    def find_layer(self, name: str) -> Optional[TileLayer]:
        """Return the first tile layer with the given name (case-insensitive)."""
        wanted = name.lower()
        for layer in self.layers:
            if layer.name.lower() == wanted:
                return layer
        return None

    def tileset_for_gid(self, gid: int) -> Optional[TilesetRef]:
        """Return the tileset owning ``gid``, or None for empty/unknown gids."""
        if gid <= 0:
            return None
        owner = None
        for tileset in self.tilesets:
            if tileset.first_gid <= gid and (owner is None or tileset.first_gid > owner.first_gid):
                owner = tileset
        return owner

    def iter_objects(self, object_type: str):
        """Yield objects of the given type from every object group."""
        for group in self.object_groups:
            for obj in group.objects:
                if obj.type == object_type:
                    yield obj
