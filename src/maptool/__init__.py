"""
maptool: build-time asset generation for a tile-based game.

Scans Tiled map exports and generates either the Lua asset manifest or the
C++ map-data module consumed by the engine build.
"""

__version__ = "0.1.0"

from .errors import (
    MapToolError,
    ProjectRootError,
    PipelineError,
    MissingAssetError,
    LoadError,
    BuildError,
    DuplicateMapError,
)
from .pipeline import GenerationMode, MapToolPipeline
from .settings import ToolSettings, PipelineConfig, find_project_root
from .utils.logging_config import setup_logging

__all__ = [
    # Pipeline
    "GenerationMode",
    "MapToolPipeline",

    # Configuration
    "ToolSettings",
    "PipelineConfig",
    "find_project_root",
    "setup_logging",

    # Errors
    "MapToolError",
    "ProjectRootError",
    "PipelineError",
    "MissingAssetError",
    "LoadError",
    "BuildError",
    "DuplicateMapError",
]
