"""
Core settings management for maptool.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings

from .types import ConfigError, ConfigVersion, PipelineConfig, ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .output import OutputSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "maptool.ini"


class ToolSettings:
    """
    Project configuration backed by an INI file read through QSettings.

    The file is optional: every key has a default, so a project without
    ``maptool.ini`` behaves like the stock game layout.
    """

    def __init__(self, project_root: Path, settings_file: Optional[Path] = None):
        """Initialize settings for a project.

        Args:
            project_root: Resolved project root directory
            settings_file: INI file to read (default: <project_root>/maptool.ini)
        """
        self.project_root = Path(project_root)
        self._settings_file = settings_file or self.project_root / SETTINGS_FILE_NAME
        self.settings = QSettings(str(self._settings_file), QSettings.Format.IniFormat)

        if self.settings.status() != QSettings.Status.NoError:
            raise ConfigError(f"Could not read settings file: {self._settings_file}")

        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._output = OutputSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        version = self.version
        if version != ConfigVersion.CURRENT.value:
            logger.warning(
                f"Settings file version {version!r} differs from {ConfigVersion.CURRENT.value!r}"
            )

        logger.debug(f"Settings initialized from {self._settings_file}")

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access input path settings subsystem."""
        return self._paths

    @property
    def output(self) -> OutputSettings:
        """Access generated-artifact settings subsystem."""
        return self._output

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    # === RESOLVED PATHS ===

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        return path if path.is_absolute() else (self.project_root / path).resolve()

    @property
    def maps_dir_path(self) -> Path:
        """Absolute maps directory."""
        return self._resolve(self._paths.maps_dir)

    @property
    def dialog_file_path(self) -> Path:
        """Absolute dialog database path."""
        return self._resolve(self._paths.dialog_file)

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @property
    def log_file_path(self) -> Path:
        """Absolute path to the log file."""
        return self._logging.log_file_absolute_path(self.project_root)

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def to_pipeline_config(self) -> PipelineConfig:
        """Freeze the current settings into a pipeline configuration."""
        return PipelineConfig(
            project_root=self.project_root,
            maps_dir=self.maps_dir_path,
            dialog_file=self.dialog_file_path,
            lua_file=self.project_root / self._output.lua_file,
            header_file=self.project_root / self._output.header_file,
            source_file=self.project_root / self._output.source_file,
            base_include=self._output.base_include,
            engine_include=self._output.engine_include,
        )

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()
