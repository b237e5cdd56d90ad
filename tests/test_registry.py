"""Tests for the map registry."""

import pytest

from maptool.errors import BuildError, DuplicateMapError
from maptool.maps import Map, MapRegistry


def _map(name: str) -> Map:
    return Map(name=name, width=8, height=8, background=tuple([0] * 64))


class TestMapRegistry:
    """Test registration and iteration order."""

    def test_empty(self) -> None:
        registry = MapRegistry()
        assert len(registry) == 0
        assert list(registry.maps_in_insertion_order()) == []

    def test_insertion_order_is_kept(self) -> None:
        registry = MapRegistry()
        for name in ("woods", "castle", "beach"):
            registry.register_map(_map(name))

        assert [m.name for m in registry.maps_in_insertion_order()] == ["woods", "castle", "beach"]
        assert registry.names() == ["woods", "castle", "beach"]

    def test_iteration_is_lazy_and_single_pass(self) -> None:
        registry = MapRegistry()
        registry.register_map(_map("a"))
        registry.register_map(_map("b"))

        maps = registry.maps_in_insertion_order()
        assert next(maps).name == "a"
        assert [m.name for m in maps] == ["b"]
        assert list(maps) == []

    def test_lookup(self) -> None:
        registry = MapRegistry()
        castle = _map("castle")
        registry.register_map(castle)

        assert "castle" in registry
        assert "woods" not in registry
        assert registry.get("castle") is castle
        assert registry.get("woods") is None

    def test_duplicate_name_is_rejected(self) -> None:
        registry = MapRegistry()
        registry.register_map(_map("castle"))

        with pytest.raises(DuplicateMapError) as exc_info:
            registry.register_map(_map("castle"))

        assert isinstance(exc_info.value, BuildError)
        assert exc_info.value.map_name == "castle"
        assert len(registry) == 1
