"""
Exception hierarchy for maptool.

Every error raised here is fatal to a generation run: the pipeline never
retries, skips a map, or writes a partial artifact.
"""

from pathlib import Path
from typing import Sequence, Union


class MapToolError(Exception):
    """Base class for all maptool errors."""
    pass


class ProjectRootError(MapToolError):
    """Raised when no project root marker file is found above the start directory."""

    def __init__(self, start: Path, marker: str, max_levels: int):
        self.start = start
        self.marker = marker
        self.max_levels = max_levels
        super().__init__(
            f"Could not find project root: no '{marker}' within {max_levels} "
            f"level(s) above {start}"
        )


class PipelineError(MapToolError):
    """Base class for errors raised while generating an artifact."""
    pass


class MissingAssetError(PipelineError):
    """Raised when a required companion image of a map is absent.

    Attributes:
        map_name: Map whose assets are incomplete
        asset_paths: Expected file names that were not found
    """

    def __init__(self, map_name: str, asset_paths: Sequence[str]):
        self.map_name = map_name
        self.asset_paths = list(asset_paths)
        missing = ", ".join(self.asset_paths)
        super().__init__(f"Could not find required image(s) for map '{map_name}': {missing}")


class LoadError(PipelineError):
    """Raised when an input file cannot be read or parsed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not load {self.path}: {reason}")


class BuildError(PipelineError):
    """Raised when a parsed scene cannot be turned into a game map."""

    def __init__(self, map_name: str, reason: str):
        self.map_name = map_name
        self.reason = reason
        super().__init__(f"Could not build map '{map_name}': {reason}")


class DuplicateMapError(BuildError):
    """Raised when two maps with the same name are found or registered in one run."""

    def __init__(self, map_name: str, reason: str = "a map with this name is already registered"):
        super().__init__(map_name, reason)
