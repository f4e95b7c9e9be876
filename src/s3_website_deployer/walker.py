"""Recursive directory listing for build output trees."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .utils.errors import FilesystemError

logger = logging.getLogger(__name__)


def list_files(root: str | os.PathLike[str]) -> list[Path]:
    """List every regular file under a directory, depth-first.

    Entries are visited in name order. Directories are recursed into,
    including symlinked ones; a link back to a directory already on the
    current path is skipped with a warning. Anything that is neither a
    directory nor a regular file is skipped.

    Args:
        root: Directory to walk

    Returns:
        Paths of all regular files, each prefixed by ``root``

    Raises:
        FilesystemError: If root is missing, not a directory, or any
            subtree cannot be read. The listing is aborted, not partial.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise FilesystemError(f"Directory does not exist: {root_path}")
    if not root_path.is_dir():
        raise FilesystemError(f"Not a directory: {root_path}")

    files: list[Path] = []
    _walk(root_path, files, ancestors=frozenset())
    return files


def _walk(directory: Path, files: list[Path], ancestors: frozenset[str]) -> None:
    real = os.path.realpath(directory)
    if real in ancestors:
        logger.warning("Skipping directory cycle at %s (resolves to %s)", directory, real)
        return
    ancestors = ancestors | {real}

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {directory}: {e.strerror or e}") from e

    for entry in entries:
        path = directory / entry.name
        try:
            if entry.is_dir():
                _walk(path, files, ancestors)
            elif entry.is_file():
                files.append(path)
        except OSError as e:
            raise FilesystemError(f"Cannot stat {path}: {e.strerror or e}") from e
