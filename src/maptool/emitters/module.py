"""
C++ map-data module generation.

Writes a header of declarations and a source file of definitions. The
emitter knows nothing about map internals: each map writes its own entries
through the Serializable capability, in lockstep across both streams.
"""

import logging
from typing import Iterable, TextIO

from ..maps.models import Serializable

GENERATED_HEADER = "// GENERATED BY MAPTOOL, DO NOT EDIT BY HAND"


class ModuleEmitter:
    """Writes the generated header/source pair."""

    def __init__(
        self,
        header_name: str = "gen_mapdata.h",
        base_include: str = "MapData.h",
        engine_include: str = "game.h",
    ):
        """Initialize the emitter.

        Args:
            header_name: File name of the generated header, included by the source
            base_include: Header declaring the map data structures
            engine_include: Engine header needed by the definitions
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.header_name = header_name
        self.base_include = base_include
        self.engine_include = engine_include

    def emit(self, maps: Iterable[Serializable], header: TextIO, source: TextIO) -> int:
        """Write both streams.

        Args:
            maps: Maps in output order
            header: Declarations stream
            source: Definitions stream

        Returns:
            Number of maps written
        """
        header.write(f"{GENERATED_HEADER}\n")
        header.write("#pragma once\n")
        header.write(f'#include "{self.base_include}"\n')
        header.write("\n")

        source.write(f"{GENERATED_HEADER}\n")
        source.write(f'#include "{self.header_name}"\n')
        source.write(f'#include "{self.engine_include}"\n')
        source.write("\n")

        count = 0
        for map_ in maps:
            map_.emit_declaration(header)
            map_.emit_definition(source)
            source.write("\n")
            count += 1

        header.write("\n")
        self.logger.debug(f"Module holds {count} map(s)")
        return count
