"""
Common base for settings subsystems.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class SettingsSection:
    """One ``[group]`` of the INI file.

    INI files carry no types, so QSettings hands back strings; the typed
    getters below convert them and fall back to the default for empty values.
    """

    group = ""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _key(self, name: str) -> str:
        return f"{self.group}/{name}"

    def _get_str(self, name: str, default: str) -> str:
        value = self.settings.value(self._key(name), default)
        text = str(value) if value is not None else ""
        return text or default

    def _get_bool(self, name: str, default: bool) -> bool:
        value = self.settings.value(self._key(name), default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value) if value is not None else default

    def _set(self, name: str, value: Any) -> None:
        self.settings.setValue(self._key(name), value)
