"""Text helpers for streaming documents line by line."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator


def strip_line_terminator(line: str) -> str:
    """Drop a trailing ``\\n`` or ``\\r\\n``; a lone ``\\r`` is kept as content."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def iter_lines(path: Path, *, buffer_size: int = 4 * 1024 * 1024) -> Iterator[str]:
    """Stream the UTF-8 lines of ``path`` without their terminators.

    Decoding errors surface as ``UnicodeDecodeError`` from the iterator, so a
    caller can abandon the whole file.
    """
    with open(path, "r", encoding="utf-8", newline="\n", buffering=buffer_size) as handle:
        for line in handle:
            yield strip_line_terminator(line)
