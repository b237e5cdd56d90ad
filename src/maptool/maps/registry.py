"""Registry of maps built during one generation run.

Keeps maps keyed by name in registration order, which is the order the
module emitter writes them in.
"""

import logging
from typing import Iterator, Optional

from ..errors import DuplicateMapError
from .models import Map


class MapRegistry:
    """Ordered, name-keyed collection of built maps.

    Owned by a single pipeline invocation. Registering a name twice is an
    error rather than a silent overwrite.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._maps: dict[str, Map] = {}

    def register_map(self, map_: Map) -> None:
        """Add a map under its name.

        Args:
            map_: Built map to register

        Raises:
            DuplicateMapError: If a map with the same name is already registered
        """
        if map_.name in self._maps:
            raise DuplicateMapError(map_.name)
        self._maps[map_.name] = map_
        self.logger.debug(f"Registered map '{map_.name}' ({len(self._maps)} total)")

    def maps_in_insertion_order(self) -> Iterator[Map]:
        """Yield registered maps in registration order."""
        yield from self._maps.values()

    def get(self, name: str) -> Optional[Map]:
        """Get a map by name, or None if not registered."""
        return self._maps.get(name)

    def names(self) -> list[str]:
        """Registered map names in registration order."""
        return list(self._maps.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._maps

    def __len__(self) -> int:
        return len(self._maps)
