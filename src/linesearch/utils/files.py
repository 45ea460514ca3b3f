"""Utility helpers for working with files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

LOGGER = logging.getLogger(__name__)


def has_extension(path: Path, extension: str) -> bool:
    """Case-insensitive check of a path's final suffix against ``extension``."""
    return path.suffix.lower() == f".{extension.lstrip('.').lower()}"


def _is_regular_file(path: Path) -> bool:
    try:
        return path.is_file() and not path.is_symlink()
    except OSError as exc:
        LOGGER.debug("Skipping %s: %s", path, exc)
        return False


def _walk(root: Path, extension: str) -> Iterator[Path]:
    def _on_error(exc: OSError) -> None:
        LOGGER.debug("Skipping unreadable entry %s: %s", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for name in sorted(filenames):
            candidate = Path(dirpath) / name
            if has_extension(candidate, extension) and _is_regular_file(candidate):
                yield candidate


def iter_text_paths(inputs: Iterable[Path], extension: str = "txt") -> Iterator[Path]:
    """Yield matching files from input paths, descending into directories.

    Within a directory, files come before subdirectories and both are
    visited in name order. Symlinks and entries that cannot be read are
    skipped.
    """
    for item in inputs:
        item = Path(item)
        if item.is_dir():
            yield from _walk(item, extension)
        elif has_extension(item, extension) and _is_regular_file(item):
            yield item


def file_size(path: Path) -> int | None:
    """Return the size of ``path`` in bytes, or ``None`` if it cannot be stat'ed."""
    try:
        return path.stat().st_size
    except OSError as exc:
        LOGGER.debug("Unable to stat %s: %s", path, exc)
        return None
