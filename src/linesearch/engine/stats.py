"""Size and health reporting over the document cache."""

from __future__ import annotations

from linesearch.engine.cache import DocumentCache
from linesearch.models import Stats, Status


class StatsReporter:
    def __init__(self, cache: DocumentCache) -> None:
        self.cache = cache

    def total_size(self) -> int:
        """Sum of document sizes; files that cannot be stat'ed count as zero."""
        return sum(document.size or 0 for document in self.cache.documents)

    def is_healthy(self) -> bool:
        root = self.cache.root
        return root.exists() and root.is_dir()

    def stats(self) -> Stats:
        return Stats(
            total_documents=len(self.cache),
            index_size_bytes=self.total_size(),
            last_updated=self.cache.last_scanned,
            search_path=str(self.cache.root),
        )

    def status(self) -> Status:
        healthy = self.is_healthy()
        return Status(
            index_exists=healthy,
            index_healthy=healthy,
            total_documents=len(self.cache),
            index_size_bytes=self.total_size(),
            last_updated=self.cache.last_scanned,
        )
