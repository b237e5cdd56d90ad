"""
Project root discovery.

The tool may be started anywhere inside a game project. The root is the
nearest directory, walking upward, that holds the build-control file.
"""

import logging
from pathlib import Path
from typing import Optional

from ..errors import ProjectRootError

logger = logging.getLogger(__name__)

DEFAULT_MARKER_FILE = "Makefile"
DEFAULT_MAX_LEVELS = 16


def find_project_root(
    start: Optional[Path] = None,
    marker: str = DEFAULT_MARKER_FILE,
    max_levels: int = DEFAULT_MAX_LEVELS,
) -> Path:
    """Find the project root at or above ``start``.

    Args:
        start: Directory to begin the search from (default: current directory)
        marker: File whose presence identifies the root
        max_levels: Maximum number of parent directories to climb

    Returns:
        Absolute path of the project root

    Raises:
        ProjectRootError: If the marker is not found within ``max_levels``
    """
    origin = (start or Path.cwd()).resolve()
    candidate = origin
    for level in range(max_levels + 1):
        if (candidate / marker).is_file():
            logger.debug(f"Project root found at {candidate} ({level} level(s) up)")
            return candidate
        if candidate.parent == candidate:
            break
        candidate = candidate.parent

    raise ProjectRootError(origin, marker, max_levels)
