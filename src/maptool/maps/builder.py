"""Building game maps from parsed scenes.

Interprets a Tiled scene with the game's conventions: a ``background``
layer, an optional ``overlay`` layer, 16x16 tiles laid out in 8x8-tile
rooms, and ``portal`` objects linking maps together.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from ..errors import BuildError
from ..tmx.models import Scene, SceneObject, TileLayer, TilesetRef
from .models import EMPTY_TILE, ROOM_TILES, TILE_SIZE, Map, Portal

BACKGROUND_LAYER = "background"
OVERLAY_LAYER = "overlay"
PORTAL_TYPE = "portal"


class MapBuilder:
    """Builds Map instances from Scene instances.

    When a tileset's atlas image sits next to the map it is opened with
    Pillow to make sure every referenced tile exists in it.
    """

    def __init__(self, check_atlas: bool = True):
        """Initialize the builder.

        Args:
            check_atlas: Verify tile indices against the atlas image size
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.check_atlas = check_atlas

    def build(self, scene: Scene) -> Map:
        """Convert a scene into a game map.

        Args:
            scene: Parsed map-editor export

        Returns:
            Immutable Map named after the scene's file

        Raises:
            BuildError: If the scene breaks one of the game's map conventions
        """
        name = scene.name
        self._check_geometry(scene)

        background_layer = scene.find_layer(BACKGROUND_LAYER)
        if background_layer is None:
            if not scene.layers:
                raise BuildError(name, "scene has no tile layers")
            background_layer = scene.layers[0]
            self.logger.debug(
                f"Map '{name}' has no '{BACKGROUND_LAYER}' layer, using '{background_layer.name}'"
            )

        overlay_layer = scene.find_layer(OVERLAY_LAYER)
        if overlay_layer is background_layer:
            overlay_layer = None

        capacities: dict[int, Optional[int]] = {}
        background = self._resolve_layer(scene, background_layer, capacities, empty=0)
        overlay = None
        if overlay_layer is not None:
            overlay = self._resolve_layer(scene, overlay_layer, capacities, empty=EMPTY_TILE)

        portals = tuple(
            self._build_portal(scene, obj) for obj in scene.iter_objects(PORTAL_TYPE)
        )

        built = Map(
            name=name,
            width=scene.width,
            height=scene.height,
            background=background,
            overlay=overlay,
            portals=portals,
        )
        self.logger.debug(f"Built {built!r}")
        return built

    def _check_geometry(self, scene: Scene) -> None:
        if scene.tile_width != TILE_SIZE or scene.tile_height != TILE_SIZE:
            raise BuildError(
                scene.name,
                f"tile size must be {TILE_SIZE}x{TILE_SIZE}, got "
                f"{scene.tile_width}x{scene.tile_height}",
            )
        if scene.width % ROOM_TILES or scene.height % ROOM_TILES:
            raise BuildError(
                scene.name,
                f"map size {scene.width}x{scene.height} is not a whole number of "
                f"{ROOM_TILES}x{ROOM_TILES} rooms",
            )

    def _resolve_layer(
        self,
        scene: Scene,
        layer: TileLayer,
        capacities: dict[int, Optional[int]],
        empty: int,
    ) -> tuple[int, ...]:
        """Translate a layer's global ids into atlas indices.

        Args:
            scene: Scene owning the layer and its tilesets
            layer: Layer to translate
            capacities: Atlas tile counts already computed, keyed by first gid
            empty: Index to store for empty cells

        Returns:
            Row-major atlas indices
        """
        if layer.width != scene.width or layer.height != scene.height:
            raise BuildError(
                scene.name,
                f"layer '{layer.name}' is {layer.width}x{layer.height}, "
                f"map is {scene.width}x{scene.height}",
            )

        indices: list[int] = []
        for position, gid in enumerate(layer.gids):
            if gid == 0:
                indices.append(empty)
                continue

            x, y = position % layer.width, position // layer.width
            tileset = scene.tileset_for_gid(gid)
            if tileset is None:
                raise BuildError(
                    scene.name, f"layer '{layer.name}' tile ({x}, {y}) has unknown gid {gid}"
                )

            index = gid - tileset.first_gid
            if index >= EMPTY_TILE:
                raise BuildError(
                    scene.name,
                    f"layer '{layer.name}' tile ({x}, {y}) uses atlas index {index}, "
                    f"limit is {EMPTY_TILE - 1}",
                )

            if tileset.first_gid not in capacities:
                capacities[tileset.first_gid] = self._atlas_capacity(scene, tileset)
            capacity = capacities[tileset.first_gid]
            if capacity is not None and index >= capacity:
                raise BuildError(
                    scene.name,
                    f"layer '{layer.name}' tile ({x}, {y}) uses atlas index {index}, "
                    f"tileset '{tileset.name}' has {capacity} tile(s)",
                )

            indices.append(index)

        return tuple(indices)

    def _atlas_capacity(self, scene: Scene, tileset: TilesetRef) -> Optional[int]:
        """Number of tiles available in a tileset, or None if unknown."""
        if tileset.tile_width not in (0, TILE_SIZE) or tileset.tile_height not in (0, TILE_SIZE):
            raise BuildError(
                scene.name,
                f"tileset '{tileset.name}' tiles are {tileset.tile_width}x{tileset.tile_height}, "
                f"expected {TILE_SIZE}x{TILE_SIZE}",
            )

        if self.check_atlas and tileset.image_source:
            image_path = scene.path.parent / tileset.image_source
            if image_path.is_file():
                return self._read_atlas_capacity(scene.name, tileset, image_path)

        return tileset.tile_count

    def _read_atlas_capacity(self, map_name: str, tileset: TilesetRef, image_path: Path) -> int:
        try:
            with Image.open(image_path) as image:
                width, height = image.size
        except OSError as e:
            raise BuildError(map_name, f"tileset image {image_path.name} could not be read: {e}") from e

        if width % TILE_SIZE or height % TILE_SIZE:
            raise BuildError(
                map_name,
                f"tileset image {image_path.name} is {width}x{height}, "
                f"not a multiple of {TILE_SIZE}",
            )

        capacity = (width // TILE_SIZE) * (height // TILE_SIZE)
        self.logger.debug(
            f"Atlas {image_path.name} of tileset '{tileset.name}' holds {capacity} tile(s)"
        )
        return capacity

    def _build_portal(self, scene: Scene, obj: SceneObject) -> Portal:
        label = obj.name or f"#{obj.id}"
        target = obj.properties.get("target", "").strip()
        if not target:
            raise BuildError(scene.name, f"portal {label} has no 'target' property")

        try:
            target_x = int(obj.properties.get("target_x", 0))
            target_y = int(obj.properties.get("target_y", 0))
        except ValueError as e:
            raise BuildError(scene.name, f"portal {label} has a non-integer target position") from e

        x = int(obj.x) // TILE_SIZE
        y = int(obj.y) // TILE_SIZE
        if not (0 <= x < scene.width and 0 <= y < scene.height):
            raise BuildError(scene.name, f"portal {label} at tile ({x}, {y}) is outside the map")

        return Portal(x=x, y=y, target=target, target_x=target_x, target_y=target_y)
