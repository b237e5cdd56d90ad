"""
Data models for game-ready maps.

A Map is what the engine consumes: resolved atlas indices for its tile
layers and the portals linking it to other maps. Maps know how to write
themselves as C++ declarations and definitions; the module emitter only
relies on the Serializable capability.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol, TextIO, runtime_checkable

TILE_SIZE = 16
"""Tile edge in pixels, fixed by the engine's tile atlas."""

ROOM_TILES = 8
"""Room edge in tiles; one room is one 128x128 screen."""

EMPTY_TILE = 0xFF
"""Overlay index meaning 'nothing drawn here'."""

VALUES_PER_LINE = 16
"""Values per line in generated tile arrays."""


@runtime_checkable
class Serializable(Protocol):
    """Capability of writing a C++ declaration and definition."""

    def emit_declaration(self, header: TextIO) -> None:
        """Write the declaration(s) belonging in the generated header."""
        ...

    def emit_definition(self, source: TextIO) -> None:
        """Write the definition(s) belonging in the generated source."""
        ...


@dataclass(frozen=True)
class Portal:
    """A transition from a tile of one map to a tile of another.

    Attributes:
        x: Tile column of the portal on its own map
        y: Tile row of the portal on its own map
        target: Name of the destination map
        target_x: Tile column to arrive at
        target_y: Tile row to arrive at
    """

    x: int
    y: int
    target: str
    target_x: int = 0
    target_y: int = 0


@dataclass(frozen=True)
class Map:
    """A built, immutable game map.

    Tile layers are row-major tuples of atlas indices, ``width * height``
    long. ``overlay`` is None when the map has no overlay layer.
    """

    name: str
    width: int
    height: int
    background: tuple[int, ...]
    overlay: Optional[tuple[int, ...]] = None
    portals: tuple[Portal, ...] = field(default_factory=tuple)

    @property
    def symbol(self) -> str:
        """C++ identifier of this map's MapData instance."""
        return f"gMapData_{self.name}"

    @property
    def width_in_rooms(self) -> int:
        return self.width // ROOM_TILES

    @property
    def height_in_rooms(self) -> int:
        return self.height // ROOM_TILES

    # === SERIALIZATION ===

    def emit_declaration(self, header: TextIO) -> None:
        header.write(f"extern const MapData {self.symbol};\n")

    def emit_definition(self, source: TextIO) -> None:
        self._write_tile_array(source, f"{self.name}_background", self.background)
        if self.overlay is not None:
            self._write_tile_array(source, f"{self.name}_overlay", self.overlay)
        if self.portals:
            source.write(f"static const PortalData {self.name}_portals[] = {{\n")
            for portal in self.portals:
                source.write(
                    f"    {{ {portal.x}, {portal.y}, &gMapData_{portal.target}, "
                    f"{portal.target_x}, {portal.target_y} }},\n"
                )
            source.write("};\n")

        overlay_asset = f"&Overlay_{self.name}" if self.overlay is not None else "nullptr"
        overlay_tiles = f"{self.name}_overlay" if self.overlay is not None else "nullptr"
        portals = f"{self.name}_portals" if self.portals else "nullptr"

        source.write(f"const MapData {self.symbol} = {{\n")
        source.write(f"    &TileSet_{self.name},\n")
        source.write(f"    {overlay_asset},\n")
        source.write(f"    &Blank_{self.name},\n")
        source.write(f"    {self.name}_background,\n")
        source.write(f"    {overlay_tiles},\n")
        source.write(f"    {portals},\n")
        source.write(f"    {self.width_in_rooms}, {self.height_in_rooms}, {len(self.portals)}\n")
        source.write("};\n")

    def _write_tile_array(self, source: TextIO, identifier: str, tiles: tuple[int, ...]) -> None:
        source.write(f"static const uint8_t {identifier}[] = {{\n")
        for start in range(0, len(tiles), VALUES_PER_LINE):
            row = tiles[start:start + VALUES_PER_LINE]
            source.write("    " + ", ".join(str(index) for index in row) + ",\n")
        source.write("};\n")

    def __repr__(self) -> str:
        return (
            f"Map(name={self.name!r}, {self.width}x{self.height}, "
            f"overlay={self.overlay is not None}, portals={len(self.portals)})"
        )
