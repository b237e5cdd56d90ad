"""
Generated-artifact settings for maptool.
"""

from .base import SettingsSection

DEFAULT_LUA_FILE = "gen_assets.lua"
DEFAULT_HEADER_FILE = "gen_mapdata.h"
DEFAULT_SOURCE_FILE = "gen_mapdata.cpp"
DEFAULT_BASE_INCLUDE = "MapData.h"
DEFAULT_ENGINE_INCLUDE = "game.h"


class OutputSettings(SettingsSection):
    """Manages names of generated files and the includes they reference.

    File names are plain names; the files are always written to the
    project root, where the build expects them.
    """

    group = "output"

    @property
    def lua_file(self) -> str:
        """Lua asset manifest written by ``-gen_lua``."""
        return self._get_str("lua_file", DEFAULT_LUA_FILE)

    @lua_file.setter
    def lua_file(self, value: str) -> None:
        self._set("lua_file", value)

    @property
    def header_file(self) -> str:
        """C++ header written by ``-gen_cxx``."""
        return self._get_str("header_file", DEFAULT_HEADER_FILE)

    @header_file.setter
    def header_file(self, value: str) -> None:
        self._set("header_file", value)

    @property
    def source_file(self) -> str:
        """C++ source written by ``-gen_cxx``."""
        return self._get_str("source_file", DEFAULT_SOURCE_FILE)

    @source_file.setter
    def source_file(self, value: str) -> None:
        self._set("source_file", value)

    @property
    def base_include(self) -> str:
        return self._get_str("base_include", DEFAULT_BASE_INCLUDE)

    @property
    def engine_include(self) -> str:
        return self._get_str("engine_include", DEFAULT_ENGINE_INCLUDE)
