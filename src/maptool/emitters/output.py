"""
Staged writing of generated artifacts.

Generated files feed a compile step, so none is ever left half-written:
content is rendered into memory first, written to sibling temporary files,
and only then moved into place with ``os.replace``.
"""

import io
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def _temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + TEMP_SUFFIX)


def commit_outputs(outputs: Iterable[tuple[Path, str]]) -> None:
    """Write every output, replacing existing files only once all are written.

    Writing the temporary files is all-or-nothing: if one fails, no
    destination is touched. Each ``os.replace`` after that is atomic on its
    own, but if a later one fails the destinations already moved keep their
    new content. Leftover temporary files are removed in every case.

    Args:
        outputs: (destination, content) pairs

    Raises:
        OSError: If a temporary file cannot be written or moved into place
    """
    pending = list(outputs)
    staged: list[tuple[Path, Path]] = []
    try:
        for path, content in pending:
            temp_path = _temp_path_for(path)
            with open(temp_path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            staged.append((temp_path, path))

        for temp_path, path in staged:
            os.replace(temp_path, path)
            logger.info(f"Wrote {path}")
    finally:
        for temp_path, _ in staged:
            if temp_path.exists():
                temp_path.unlink()


@contextmanager
def staged_outputs(*paths: Path) -> Iterator[list[io.StringIO]]:
    """Yield one in-memory buffer per path, committed on a clean exit.

    If the body raises, nothing is written.

    Example:
        >>> with staged_outputs(header_path, source_path) as (header, source):
        ...     emitter.emit(maps, header, source)
    """
    buffers = [io.StringIO() for _ in paths]
    yield buffers
    commit_outputs(zip(paths, (buffer.getvalue() for buffer in buffers)))
