"""Validate plain-text files and copy them into the search directory."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from linesearch.config import DEFAULT_EXTENSION, DEFAULT_MAX_INGEST_BYTES
from linesearch.utils.files import has_extension, iter_text_paths

LOGGER = logging.getLogger(__name__)


class IngestionError(ValueError):
    """Raised when a file is not acceptable as a searchable document."""


@dataclass(slots=True)
class IngestStats:
    ingested: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)
    stored_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "ingested":
            self.ingested += 1
        else:
            self.failed += 1
        self.processed_files.append(path)

    def to_dict(self) -> dict:
        return {
            "ingested": self.ingested,
            "failed": self.failed,
            "processed_files": [str(path) for path in self.processed_files],
            "stored_files": [str(path) for path in self.stored_files],
        }


def validate_text_file(
    path: Path,
    *,
    extension: str = DEFAULT_EXTENSION,
    max_bytes: int = DEFAULT_MAX_INGEST_BYTES,
) -> int:
    """Check that ``path`` is a non-empty UTF-8 text file and return its size."""
    if not path.is_file():
        raise IngestionError(f"File not found: {path}")
    if not has_extension(path, extension):
        raise IngestionError(f"Only .{extension} files are supported: {path.name}")

    size = path.stat().st_size
    if size > max_bytes:
        raise IngestionError(f"File exceeds {max_bytes} bytes: {path.name}")

    try:
        content = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise IngestionError(f"File is not valid UTF-8 text: {path.name}") from exc
    if not content.strip():
        raise IngestionError(f"Empty text file is not supported: {path.name}")
    return size


def copy_into(source: Path, root: Path) -> Path:
    """Copy ``source`` to ``<stem>-<unix millis><suffix>`` under ``root``.

    The target is opened with exclusive create, so an existing file is
    never overwritten; a taken name gets a ``-<n>`` counter instead.
    """
    stamp = int(time.time() * 1000)
    counter = 0
    while True:
        tag = f"{stamp}-{counter}" if counter else f"{stamp}"
        target = root / f"{source.stem}-{tag}{source.suffix}"
        try:
            handle = target.open("xb")
        except FileExistsError:
            counter += 1
            continue
        try:
            with handle, source.open("rb") as src:
                shutil.copyfileobj(src, handle)
        except OSError:
            target.unlink(missing_ok=True)
            raise
        return target


class TextIngestor:
    """Copies validated text files into the search directory."""

    def __init__(
        self,
        root: Path,
        *,
        extension: str = DEFAULT_EXTENSION,
        max_bytes: int = DEFAULT_MAX_INGEST_BYTES,
    ) -> None:
        self.root = Path(root)
        self.extension = extension
        self.max_bytes = max_bytes

    def ingest_file(self, source: Path) -> Path:
        validate_text_file(source, extension=self.extension, max_bytes=self.max_bytes)
        target = copy_into(source, self.root)
        LOGGER.info("Ingested %s as %s", source, target.name)
        return target

    def ingest(self, paths: Sequence[Path]) -> IngestStats:
        """Ingest every file named by ``paths``; directories are walked."""
        stats = IngestStats()
        for path in self._candidates(paths):
            try:
                target = self.ingest_file(path)
            except (IngestionError, OSError) as exc:
                LOGGER.error("Failed to ingest %s: %s", path, exc)
                stats.increment("failed", path)
                continue
            stats.increment("ingested", path)
            stats.stored_files.append(target)
        return stats

    def _candidates(self, paths: Sequence[Path]) -> list[Path]:
        candidates: list[Path] = []
        for path in paths:
            path = Path(path)
            if path.is_dir():
                candidates.extend(iter_text_paths([path], self.extension))
            else:
                # files are validated individually so rejections get counted
                candidates.append(path)
        return candidates
