"""Shared fixtures: throwaway game projects with maps, images and dialogs."""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

import orjson
import pytest
from PIL import Image

from maptool.settings import PipelineConfig


def layer_xml(name: str, width: int, height: int, gids: Sequence[int]) -> str:
    rows = []
    for y in range(height):
        rows.append(",".join(str(gid) for gid in gids[y * width:(y + 1) * width]))
    csv = ",\n".join(rows)
    return (
        f'  <layer id="1" name="{name}" width="{width}" height="{height}">\n'
        f'    <data encoding="csv">\n{csv}\n</data>\n'
        f"  </layer>\n"
    )


def portal_xml(
    obj_id: int, x: int, y: int, target: str, target_x: int = 0, target_y: int = 0
) -> str:
    return (
        f'    <object id="{obj_id}" name="door{obj_id}" type="portal" x="{x}" y="{y}" width="16" height="16">\n'
        f"      <properties>\n"
        f'        <property name="target" value="{target}"/>\n'
        f'        <property name="target_x" type="int" value="{target_x}"/>\n'
        f'        <property name="target_y" type="int" value="{target_y}"/>\n'
        f"      </properties>\n"
        f"    </object>\n"
    )


def tmx_text(
    name: str,
    width: int = 8,
    height: int = 8,
    background: Optional[Sequence[int]] = None,
    overlay: Optional[Sequence[int]] = None,
    portals: Iterable[tuple[int, int, str]] = (),
    tile_size: int = 16,
    tile_count: int = 16,
) -> str:
    """Render a minimal orthogonal Tiled map."""
    if background is None:
        background = [1] * (width * height)
    layers = layer_xml("background", width, height, background)
    if overlay is not None:
        layers += layer_xml("overlay", width, height, overlay)

    objects = "".join(
        portal_xml(idx + 1, x, y, target) for idx, (x, y, target) in enumerate(portals)
    )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<map version="1.10" orientation="orthogonal" renderorder="right-down" '
        f'width="{width}" height="{height}" tilewidth="{tile_size}" tileheight="{tile_size}" infinite="0">\n'
        f'  <tileset firstgid="1" name="{name}" tilewidth="{tile_size}" tileheight="{tile_size}" '
        f'tilecount="{tile_count}" columns="4">\n'
        f'    <image source="{name}.png" width="64" height="64"/>\n'
        f"  </tileset>\n"
        f"{layers}"
        f'  <objectgroup id="9" name="markers">\n{objects}  </objectgroup>\n'
        f"</map>\n"
    )


def write_png(path: Path, size: tuple[int, int] = (64, 64)) -> Path:
    """Write a transparent RGBA image."""
    Image.new("RGBA", size, (0, 0, 0, 0)).save(path)
    return path


def add_map(
    directory: Path,
    name: str,
    tileset: bool = True,
    overlay: bool = False,
    blank: bool = True,
    overlay_layer: Optional[Sequence[int]] = None,
    **tmx_kwargs: Any,
) -> Path:
    """Create ``<name>.tmx`` plus the requested companion images.

    ``overlay`` controls the overlay image, ``overlay_layer`` the overlay
    tile layer inside the map.
    """
    tmx_path = directory / f"{name}.tmx"
    tmx_path.write_text(tmx_text(name, overlay=overlay_layer, **tmx_kwargs), encoding="utf-8")
    if tileset:
        write_png(directory / f"{name}.png")
    if overlay:
        write_png(directory / f"{name}_overlay.png")
    if blank:
        write_png(directory / f"{name}_blank.png", (128, 128))
    return tmx_path


def write_dialogs(path: Path, data: dict[str, Any]) -> Path:
    path.write_bytes(orjson.dumps(data))
    return path


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by setup_logging during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty game project root."""
    (tmp_path / "Makefile").write_text("all:\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def config(project: Path) -> PipelineConfig:
    """Pipeline configuration with every default file in the project root."""
    return PipelineConfig(
        project_root=project,
        maps_dir=project,
        dialog_file=project / "dialog.json",
        lua_file=project / "gen_assets.lua",
        header_file=project / "gen_mapdata.h",
        source_file=project / "gen_mapdata.cpp",
    )


@pytest.fixture
def make_map() -> Callable[..., Path]:
    return add_map
