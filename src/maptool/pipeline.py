"""
Generation pipeline driver.

One invocation runs exactly one mode from start to finish:

* MANIFEST: discover maps -> validate images -> load dialogs -> Lua manifest
* MODULE: discover maps -> load, build, validate images and register each
  -> C++ module pair

Nothing is written until the whole artifact has been rendered in memory.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO

from .dialog import DialogCatalog
from .discovery import check_map_images, collect_map_images, discover_source_files
from .emitters import ManifestEmitter, ModuleEmitter, staged_outputs
from .errors import BuildError, MissingAssetError
from .maps import MapBuilder, MapRegistry
from .naming import overlay_image_for
from .settings.types import PipelineConfig
from .tmx import TmxLoader


class GenerationMode(Enum):
    """Artifact produced by a pipeline run."""

    MANIFEST = "manifest"
    MODULE = "module"


class MapToolPipeline:
    """Orchestrates discovery, building and emission for one project.

    The loader, builder and dialog catalog source can be replaced, which is
    how the tests feed the pipeline without touching real game data.
    """

    def __init__(
        self,
        config: PipelineConfig,
        loader: Optional[TmxLoader] = None,
        builder: Optional[MapBuilder] = None,
        catalog_loader: Callable[[Path], DialogCatalog] = DialogCatalog.load,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.config = config
        self.loader = loader or TmxLoader()
        self.builder = builder or MapBuilder()
        self.catalog_loader = catalog_loader

    # === MANIFEST ===

    def generate_manifest(self, writer: TextIO) -> int:
        """Render the Lua manifest into ``writer``.

        Returns:
            Number of image declarations written

        Raises:
            MissingAssetError: If a map lacks a required image
            LoadError: If the dialog database is unreadable
        """
        maps_dir = self.config.maps_dir
        sources = discover_source_files(maps_dir, self.config.map_extension)
        map_images = collect_map_images(maps_dir, sources, relative_to=self.config.lua_file.parent)

        catalog = self.catalog_loader(self.config.dialog_file)
        portraits = catalog.list_portrait_image_paths()
        details = catalog.list_detail_image_paths()

        count = ManifestEmitter().emit(writer, map_images, portraits, details)
        self.logger.info(
            f"Manifest: {len(map_images)} map(s), {len(portraits)} portrait(s), "
            f"{len(details)} detail image(s)"
        )
        return count

    def write_manifest(self) -> list[Path]:
        """Generate the Lua manifest file."""
        with staged_outputs(self.config.lua_file) as (lua,):
            self.generate_manifest(lua)
        return [self.config.lua_file]

    # === MODULE ===

    def build_registry(self) -> MapRegistry:
        """Load, build and register every discovered map.

        The module refers to the same image declarations the manifest
        writes, so every map must have the images the manifest would
        declare for it, including the overlay atlas when it has an overlay
        layer.

        Raises:
            LoadError: If a map file cannot be parsed
            BuildError: If a map breaks the game's conventions or links to
                a map that does not exist
            MissingAssetError: If an image the module refers to is absent
        """
        maps_dir = self.config.maps_dir
        registry = MapRegistry()
        for source in discover_source_files(maps_dir, self.config.map_extension):
            self.logger.info(f"Processing map: {source.path.name}")
            scene = self.loader.load(source.path)
            built = self.builder.build(scene)

            images = check_map_images(maps_dir, source)
            if built.overlay is not None and images.overlay is None:
                raise MissingAssetError(built.name, [overlay_image_for(built.name)])

            registry.register_map(built)

        self._check_portal_targets(registry)
        return registry

    def _check_portal_targets(self, registry: MapRegistry) -> None:
        for map_ in registry.maps_in_insertion_order():
            for portal in map_.portals:
                target = registry.get(portal.target)
                if target is None:
                    raise BuildError(
                        map_.name,
                        f"portal at ({portal.x}, {portal.y}) targets unknown map '{portal.target}'",
                    )
                if not (0 <= portal.target_x < target.width and 0 <= portal.target_y < target.height):
                    raise BuildError(
                        map_.name,
                        f"portal at ({portal.x}, {portal.y}) arrives outside map "
                        f"'{target.name}' at ({portal.target_x}, {portal.target_y})",
                    )

    def generate_module(self, header: TextIO, source: TextIO) -> int:
        """Render the C++ module pair into ``header`` and ``source``.

        Returns:
            Number of maps written
        """
        registry = self.build_registry()
        emitter = ModuleEmitter(
            header_name=self.config.header_file.name,
            base_include=self.config.base_include,
            engine_include=self.config.engine_include,
        )
        count = emitter.emit(registry.maps_in_insertion_order(), header, source)
        self.logger.info(f"Module: {count} map(s)")
        return count

    def write_module(self) -> list[Path]:
        """Generate the C++ header and source files."""
        outputs = (self.config.header_file, self.config.source_file)
        with staged_outputs(*outputs) as (header, source):
            self.generate_module(header, source)
        return list(outputs)

    # === DISPATCH ===

    def run(self, mode: GenerationMode) -> list[Path]:
        """Run the pipeline in the given mode.

        Returns:
            Paths of the files written
        """
        self.logger.debug(f"Running pipeline in {mode.value} mode for {self.config.project_root}")
        if mode is GenerationMode.MANIFEST:
            return self.write_manifest()
        return self.write_module()
