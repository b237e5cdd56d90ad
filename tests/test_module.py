"""Tests for the C++ module emitter and map serialization."""

import io

from maptool.emitters import ModuleEmitter
from maptool.maps import EMPTY_TILE, Map, Portal, Serializable


def _map(name: str, **kwargs) -> Map:
    return Map(name=name, width=8, height=8, background=tuple(range(64)), **kwargs)


def _emit(maps) -> tuple[str, str, int]:
    header, source = io.StringIO(), io.StringIO()
    count = ModuleEmitter().emit(maps, header, source)
    return header.getvalue(), source.getvalue(), count


class TestMapSerialization:
    """Test C++ text written by a single map."""

    def test_map_is_serializable(self) -> None:
        assert isinstance(_map("castle"), Serializable)

    def test_declaration(self) -> None:
        out = io.StringIO()
        _map("castle").emit_declaration(out)
        assert out.getvalue() == "extern const MapData gMapData_castle;\n"

    def test_definition_without_overlay_or_portals(self) -> None:
        out = io.StringIO()
        _map("castle").emit_definition(out)
        lines = out.getvalue().splitlines()

        assert lines[0] == "static const uint8_t castle_background[] = {"
        assert lines[1] == "    " + ", ".join(str(i) for i in range(16)) + ","
        assert lines[5] == "};"
        assert lines[6:] == [
            "const MapData gMapData_castle = {",
            "    &TileSet_castle,",
            "    nullptr,",
            "    &Blank_castle,",
            "    castle_background,",
            "    nullptr,",
            "    nullptr,",
            "    1, 1, 0",
            "};",
        ]

    def test_definition_with_overlay_and_portals(self) -> None:
        overlay = tuple([EMPTY_TILE] * 64)
        portals = (Portal(1, 2, "woods", 3, 4),)
        out = io.StringIO()
        _map("castle", overlay=overlay, portals=portals).emit_definition(out)
        text = out.getvalue()

        assert "static const uint8_t castle_overlay[] = {\n    255, 255," in text
        assert (
            "static const PortalData castle_portals[] = {\n"
            "    { 1, 2, &gMapData_woods, 3, 4 },\n"
            "};\n"
        ) in text
        assert (
            "const MapData gMapData_castle = {\n"
            "    &TileSet_castle,\n"
            "    &Overlay_castle,\n"
            "    &Blank_castle,\n"
            "    castle_background,\n"
            "    castle_overlay,\n"
            "    castle_portals,\n"
            "    1, 1, 1\n"
            "};\n"
        ) in text


class TestModuleEmitter:
    """Test the header/source pair layout."""

    def test_empty_module(self) -> None:
        header, source, count = _emit([])

        assert count == 0
        assert header == (
            "// GENERATED BY MAPTOOL, DO NOT EDIT BY HAND\n"
            "#pragma once\n"
            '#include "MapData.h"\n'
            "\n"
            "\n"
        )
        assert source == (
            "// GENERATED BY MAPTOOL, DO NOT EDIT BY HAND\n"
            '#include "gen_mapdata.h"\n'
            '#include "game.h"\n'
            "\n"
        )

    def test_maps_in_given_order(self) -> None:
        header, source, count = _emit([_map("c"), _map("a"), _map("b")])

        assert count == 3
        declarations = [line for line in header.splitlines() if line.startswith("extern")]
        assert declarations == [
            "extern const MapData gMapData_c;",
            "extern const MapData gMapData_a;",
            "extern const MapData gMapData_b;",
        ]
        assert source.index("gMapData_c =") < source.index("gMapData_a =") < source.index("gMapData_b =")

    def test_blank_line_after_each_definition(self) -> None:
        _, source, _ = _emit([_map("a"), _map("b")])

        assert source.count("};\n\n") == 2
        assert source.endswith("};\n\n")

    def test_custom_includes(self) -> None:
        header, source = io.StringIO(), io.StringIO()
        ModuleEmitter(header_name="maps.h", base_include="Base.h", engine_include="engine.h").emit(
            [], header, source
        )

        assert '#include "Base.h"' in header.getvalue()
        assert '#include "maps.h"\n#include "engine.h"\n' in source.getvalue()
