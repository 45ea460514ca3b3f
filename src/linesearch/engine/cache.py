"""Snapshot of the searchable documents under the search directory."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterator, Tuple

from linesearch.models import Document, utcnow
from linesearch.utils.files import iter_text_paths

LOGGER = logging.getLogger(__name__)


class DocumentCache:
    """Ordered list of eligible documents, rebuilt by a full directory walk.

    The cache is a snapshot: files added or removed after ``refresh`` are not
    seen until the next refresh.
    """

    def __init__(self, root: Path, *, extension: str = "txt") -> None:
        self.root = Path(root)
        self.extension = extension
        self._documents: list[Document] = []
        self.last_scanned: datetime = utcnow()

    @property
    def documents(self) -> Tuple[Document, ...]:
        return tuple(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def refresh(self) -> None:
        documents: list[Document] = []
        if self.root.is_dir():
            documents = [Document(path) for path in iter_text_paths([self.root], self.extension)]
        else:
            LOGGER.debug("Search directory %s is missing, cache left empty", self.root)
        self._documents = documents
        self.last_scanned = utcnow()
        LOGGER.debug("Cached %d documents under %s", len(documents), self.root)
