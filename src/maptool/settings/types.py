"""
Configuration type definitions and exceptions for maptool.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List


class ConfigVersion(Enum):
    """Settings file format version."""
    V1_0 = "1.0"
    CURRENT = V1_0


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]


@dataclass(frozen=True)
class PipelineConfig:
    """Resolved, immutable inputs of one pipeline invocation.

    All paths are absolute. Built once at startup from the settings and the
    discovered project root, then passed to the pipeline driver.
    """

    project_root: Path
    maps_dir: Path
    dialog_file: Path
    lua_file: Path
    header_file: Path
    source_file: Path
    base_include: str = "MapData.h"
    engine_include: str = "game.h"
    map_extension: str = ".tmx"
