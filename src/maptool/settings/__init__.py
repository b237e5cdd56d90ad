"""
Settings package for maptool.

Project configuration is read from an optional ``maptool.ini`` at the
project root through Qt's QSettings in INI format.

Usage:
    from maptool.settings import ToolSettings, find_project_root

    root = find_project_root()
    settings = ToolSettings(root)
    config = settings.to_pipeline_config()
"""

from .core import ToolSettings, SETTINGS_FILE_NAME
from .types import ConfigVersion, ConfigError, PipelineConfig, ValidationResult
from .project_root import find_project_root, DEFAULT_MARKER_FILE, DEFAULT_MAX_LEVELS

__all__ = [
    "ToolSettings",
    "SETTINGS_FILE_NAME",
    "ConfigVersion",
    "ConfigError",
    "PipelineConfig",
    "ValidationResult",
    "find_project_root",
    "DEFAULT_MARKER_FILE",
    "DEFAULT_MAX_LEVELS",
]
