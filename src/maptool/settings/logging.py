"""
Logging-related settings for maptool.
"""

import logging
from pathlib import Path

from .base import SettingsSection

logger = logging.getLogger(__name__)

DEFAULT_CONSOLE_LEVEL = "INFO"
DEFAULT_LOG_FILE_PATH = "logs/maptool.csv"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(SettingsSection):
    """Console and file logging options (``[logging]`` group)."""

    group = "logging"

    @property
    def console_log_level(self) -> str:
        """Console level; unknown names in the file fall back to INFO."""
        level = self._get_str("console_level", DEFAULT_CONSOLE_LEVEL).upper()
        return level if level in VALID_LEVELS else DEFAULT_CONSOLE_LEVEL

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        if value.upper() not in VALID_LEVELS:
            logger.warning(
                f"Invalid console log level: {value}, keeping current: {self.console_log_level}"
            )
            return
        self._set("console_level", value.upper())

    @property
    def console_use_colors(self) -> bool:
        """Colour level names when the console is a terminal."""
        return self._get_bool("console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set("console_use_colors", value)

    @property
    def file_logging(self) -> bool:
        """Also write a CSV log file."""
        return self._get_bool("file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set("file_enabled", value)

    @property
    def log_file_path(self) -> str:
        """Log file path, relative to the project root unless absolute."""
        return self._get_str("file_path", DEFAULT_LOG_FILE_PATH)

    def log_file_absolute_path(self, project_root: Path) -> Path:
        path = Path(self.log_file_path)
        return path if path.is_absolute() else (project_root / path).resolve()
