"""Dialog database access: portrait and detail images referenced by dialogs."""

from .catalog import DialogCatalog, Character, DialogLine, Dialog

__all__ = ["DialogCatalog", "Character", "DialogLine", "Dialog"]
