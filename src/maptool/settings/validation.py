"""
Settings validation system for maptool.
"""

import logging
from pathlib import PurePath
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import ToolSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings against the project on disk."""

    def __init__(self, settings: "ToolSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        maps_dir = self.settings.maps_dir_path
        if not maps_dir.exists():
            errors.append(f"Maps directory does not exist: {maps_dir}")
        elif not maps_dir.is_dir():
            errors.append(f"Maps path is not a directory: {maps_dir}")

        dialog_file = self.settings.dialog_file_path
        if not dialog_file.exists():
            warnings.append(
                f"Dialog database not found, NPC and detail sections will be empty: {dialog_file}"
            )

        output_names = {
            "output/lua_file": self.settings.output.lua_file,
            "output/header_file": self.settings.output.header_file,
            "output/source_file": self.settings.output.source_file,
        }
        for key, name in output_names.items():
            if PurePath(name).name != name:
                errors.append(f"'{key}' must be a plain file name, got {name!r}")

        if self.settings.output.header_file == self.settings.output.source_file:
            errors.append("'output/header_file' and 'output/source_file' must differ")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
