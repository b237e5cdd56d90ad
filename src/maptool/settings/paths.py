"""
Input path settings for maptool.
"""

from .base import SettingsSection

DEFAULT_MAPS_DIR = "."
DEFAULT_DIALOG_FILE = "dialog.json"


class PathSettings(SettingsSection):
    """Manages input locations, relative to the project root."""

    group = "paths"

    @property
    def maps_dir(self) -> str:
        """Directory scanned for map-editor exports."""
        return self._get_str("maps_dir", DEFAULT_MAPS_DIR)

    @maps_dir.setter
    def maps_dir(self, value: str) -> None:
        self._set("maps_dir", value)

    @property
    def dialog_file(self) -> str:
        """Dialog database supplying portrait and detail images."""
        return self._get_str("dialog_file", DEFAULT_DIALOG_FILE)

    @dialog_file.setter
    def dialog_file(self, value: str) -> None:
        self._set("dialog_file", value)
