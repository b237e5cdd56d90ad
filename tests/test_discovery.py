"""Tests for map discovery and companion image validation."""

from pathlib import Path

import pytest

from maptool.discovery import (
    SourceFile,
    check_map_images,
    collect_map_images,
    discover_source_files,
)
from maptool.errors import DuplicateMapError, MissingAssetError


class TestDiscoverSourceFiles:
    """Test scanning a directory for map exports."""

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert discover_source_files(tmp_path) == []

    def test_only_tmx_files_sorted_by_name(self, tmp_path: Path) -> None:
        for name in ("woods.tmx", "castle.tmx", "notes.txt", "castle.png", "beach.tmx"):
            (tmp_path / name).write_text("", encoding="utf-8")

        names = [source.name for source in discover_source_files(tmp_path)]
        assert names == ["beach", "castle", "woods"]

    def test_not_recursive(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "cave.tmx").write_text("", encoding="utf-8")
        (tmp_path / "castle.tmx").write_text("", encoding="utf-8")

        assert [s.name for s in discover_source_files(tmp_path)] == ["castle"]

    def test_directories_are_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "odd.tmx").mkdir()
        assert discover_source_files(tmp_path) == []

    def test_extension_case_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "castle.TMX").write_text("", encoding="utf-8")
        assert [s.name for s in discover_source_files(tmp_path)] == ["castle"]

    def test_same_map_name_twice(self, tmp_path: Path) -> None:
        """Two files differing only in extension case name the same map."""
        (tmp_path / "castle.tmx").write_text("", encoding="utf-8")
        if (tmp_path / "castle.TMX").exists():
            pytest.skip("case-insensitive file system")
        (tmp_path / "castle.TMX").write_text("", encoding="utf-8")

        with pytest.raises(DuplicateMapError) as exc_info:
            discover_source_files(tmp_path)

        assert exc_info.value.map_name == "castle"
        assert "castle.TMX" in str(exc_info.value)
        assert "castle.tmx" in str(exc_info.value)


class TestCheckMapImages:
    """Test the per-map image rules."""

    def _touch(self, directory: Path, *names: str) -> None:
        for name in names:
            (directory / name).write_bytes(b"")

    def test_without_overlay(self, tmp_path: Path) -> None:
        self._touch(tmp_path, "castle.tmx", "castle.png", "castle_blank.png")

        images = check_map_images(tmp_path, SourceFile(tmp_path / "castle.tmx"))

        assert images.map_name == "castle"
        assert images.tileset == "castle.png"
        assert images.blank == "castle_blank.png"
        assert images.overlay is None

    def test_with_overlay(self, tmp_path: Path) -> None:
        self._touch(tmp_path, "castle.tmx", "castle.png", "castle_overlay.png", "castle_blank.png")

        images = check_map_images(tmp_path, SourceFile(tmp_path / "castle.tmx"))

        assert images.overlay == "castle_overlay.png"

    def test_missing_blank_is_fatal(self, tmp_path: Path) -> None:
        self._touch(tmp_path, "castle.tmx", "castle.png")

        with pytest.raises(MissingAssetError) as exc_info:
            check_map_images(tmp_path, SourceFile(tmp_path / "castle.tmx"))

        assert exc_info.value.asset_paths == ["castle_blank.png"]
        assert "castle_blank.png" in str(exc_info.value)

    def test_missing_tileset_and_blank_are_both_named(self, tmp_path: Path) -> None:
        self._touch(tmp_path, "castle.tmx")

        with pytest.raises(MissingAssetError) as exc_info:
            check_map_images(tmp_path, SourceFile(tmp_path / "castle.tmx"))

        assert exc_info.value.asset_paths == ["castle.png", "castle_blank.png"]

    def test_paths_relative_to_manifest_directory(self, tmp_path: Path) -> None:
        maps_dir = tmp_path / "maps"
        maps_dir.mkdir()
        self._touch(maps_dir, "castle.tmx", "castle.png", "castle_blank.png")

        images = check_map_images(maps_dir, SourceFile(maps_dir / "castle.tmx"), relative_to=tmp_path)

        assert images.tileset == "maps/castle.png"
        assert images.blank == "maps/castle_blank.png"

    def test_collect_stops_at_first_invalid_map(self, tmp_path: Path) -> None:
        self._touch(tmp_path, "a.tmx", "a.png", "a_blank.png", "b.tmx", "b.png")
        sources = discover_source_files(tmp_path)

        with pytest.raises(MissingAssetError, match="b_blank.png"):
            collect_map_images(tmp_path, sources)
