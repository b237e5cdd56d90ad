"""
Dialog database loading.

The dialog database is a JSON document listing the game's characters and
their dialogs::

    {
      "characters": [{"name": "hero", "portrait": "hero.png"}],
      "dialogs": [
        {"character": "hero",
         "lines": [{"text": "Hello", "image": "detail_castle.png"}]}
      ]
    }

Only the image references matter to asset generation.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, cast

import orjson

from ..errors import LoadError
from ..naming import PNG_SUFFIX

UNSAFE_IMAGE_CHARS = ('"', "\\", "\n", "\r")


@dataclass(frozen=True)
class Character:
    name: str
    portrait: Optional[str] = None


@dataclass(frozen=True)
class DialogLine:
    text: str
    image: Optional[str] = None


@dataclass(frozen=True)
class Dialog:
    character: str
    lines: tuple[DialogLine, ...] = field(default_factory=tuple)


def _unique(paths: Iterable[Optional[str]]) -> list[str]:
    """Distinct non-empty paths in first-seen order."""
    seen: dict[str, None] = {}
    for path in paths:
        if path:
            seen.setdefault(path, None)
    return list(seen)


class DialogCatalog:
    """Characters and dialogs of the game, as far as images are concerned."""

    def __init__(
        self,
        characters: Iterable[Character] = (),
        dialogs: Iterable[Dialog] = (),
    ):
        self.characters = list(characters)
        self.dialogs = list(dialogs)

    @classmethod
    def load(cls, path: Path) -> "DialogCatalog":
        """Load the catalog from a JSON dialog database.

        A missing file yields an empty catalog: a project without dialogs
        still gets a valid manifest.

        Args:
            path: Path to the dialog database

        Returns:
            Loaded DialogCatalog

        Raises:
            LoadError: If the file cannot be read or does not match the format
        """
        logger = logging.getLogger(f"{__name__}.{cls.__name__}")
        path = Path(path)
        if not path.exists():
            logger.warning(f"Dialog database not found, no NPC or detail images: {path}")
            return cls()

        try:
            with path.open("rb") as f:  # orjson works with bytes
                data = orjson.loads(f.read())
        except orjson.JSONDecodeError as e:
            raise LoadError(path, f"invalid JSON: {e}") from e
        except OSError as e:
            raise LoadError(path, str(e)) from e

        if not isinstance(data, dict):
            raise LoadError(path, "top-level value must be an object")

        root = cast(dict[str, Any], data)
        characters = [
            cls._read_character(path, idx, item)
            for idx, item in enumerate(cls._read_list(path, root, "characters"))
        ]
        dialogs = [
            cls._read_dialog(path, idx, item)
            for idx, item in enumerate(cls._read_list(path, root, "dialogs"))
        ]

        catalog = cls(characters, dialogs)
        logger.info(
            f"Loaded dialog database with {len(catalog.characters)} character(s) "
            f"and {len(catalog.dialogs)} dialog(s)"
        )
        return catalog

    @staticmethod
    def _read_list(path: Path, data: dict[str, Any], key: str) -> list[Any]:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise LoadError(path, f"'{key}' must be an array")
        return cast(list[Any], value)

    @staticmethod
    def _read_image(path: Path, where: str, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise LoadError(path, f"{where}: image must be a string, got {value!r}")
        if not value.endswith(PNG_SUFFIX):
            raise LoadError(path, f"{where}: image must be a {PNG_SUFFIX} file, got {value!r}")
        # The name also becomes part of a Lua identifier
        if any(char in value for char in UNSAFE_IMAGE_CHARS):
            raise LoadError(
                path, f"{where}: image name contains a quote, backslash or line break: {value!r}"
            )
        return value

    @classmethod
    def _read_character(cls, path: Path, idx: int, item: Any) -> Character:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise LoadError(path, f"character {idx}: expected an object with a 'name' string")
        obj = cast(dict[str, Any], item)
        return Character(
            name=obj["name"],
            portrait=cls._read_image(path, f"character '{obj['name']}'", obj.get("portrait")),
        )

    @classmethod
    def _read_dialog(cls, path: Path, idx: int, item: Any) -> Dialog:
        if not isinstance(item, dict):
            raise LoadError(path, f"dialog {idx}: expected an object")
        obj = cast(dict[str, Any], item)
        raw_lines = obj.get("lines", [])
        if not isinstance(raw_lines, list):
            raise LoadError(path, f"dialog {idx}: 'lines' must be an array")

        lines: list[DialogLine] = []
        for line_idx, raw_line in enumerate(cast(list[Any], raw_lines)):
            if not isinstance(raw_line, dict):
                raise LoadError(path, f"dialog {idx} line {line_idx}: expected an object")
            line = cast(dict[str, Any], raw_line)
            lines.append(
                DialogLine(
                    text=str(line.get("text", "")),
                    image=cls._read_image(path, f"dialog {idx} line {line_idx}", line.get("image")),
                )
            )

        return Dialog(character=str(obj.get("character", "")), lines=tuple(lines))

    def list_portrait_image_paths(self) -> list[str]:
        """Portrait images of all characters, each once, in character order."""
        return _unique(character.portrait for character in self.characters)

    def list_detail_image_paths(self) -> list[str]:
        """Detail images shown by dialog lines, each once, in dialog order."""
        return _unique(line.image for dialog in self.dialogs for line in dialog.lines)
