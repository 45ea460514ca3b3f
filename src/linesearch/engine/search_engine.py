"""Search engine façade owning the document cache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from linesearch.config import (
    DEFAULT_EXTENSION,
    DEFAULT_MAX_INGEST_BYTES,
    DEFAULT_READ_BUFFER_BYTES,
    AppConfig,
)
from linesearch.engine.cache import DocumentCache
from linesearch.engine.executor import QueryExecutor
from linesearch.engine.maintenance import MaintenanceRunner
from linesearch.engine.stats import StatsReporter
from linesearch.ingestion.text_loader import IngestStats, TextIngestor
from linesearch.models import MaintenanceResult, SearchResponse, Stats, Status

LOGGER = logging.getLogger(__name__)


class SearchEngine:
    """Full-text line search over one search directory.

    Construction creates the directory if needed and performs the initial
    cache refresh; an ``OSError`` from creating the directory propagates.
    Instances do no locking of their own, so callers sharing one engine
    across threads must serialise access.
    """

    def __init__(
        self,
        root: Path,
        *,
        extension: str = DEFAULT_EXTENSION,
        read_buffer_bytes: int = DEFAULT_READ_BUFFER_BYTES,
        ingestion: bool = True,
        max_ingest_bytes: int = DEFAULT_MAX_INGEST_BYTES,
    ) -> None:
        self.root = Path(root).absolute()
        self.root.mkdir(parents=True, exist_ok=True)

        self.cache = DocumentCache(self.root, extension=extension)
        self.cache.refresh()
        LOGGER.info("Search directory %s holds %d documents", self.root, len(self.cache))

        self.executor = QueryExecutor(self.cache, read_buffer_bytes=read_buffer_bytes)
        self.maintenance = MaintenanceRunner(self.cache)
        self.reporter = StatsReporter(self.cache)
        self.ingestor: TextIngestor | None = None
        if ingestion:
            self.ingestor = TextIngestor(self.root, extension=extension, max_bytes=max_ingest_bytes)

    @classmethod
    def from_config(cls, config: AppConfig, base_dir: Path | None = None, **kwargs) -> "SearchEngine":
        return cls(
            config.resolve_search_dir(base_dir),
            extension=config.extension,
            read_buffer_bytes=config.read_buffer_bytes,
            max_ingest_bytes=config.max_ingest_bytes,
            **kwargs,
        )

    def search(self, query: str, limit: int = 10, offset: int = 0) -> SearchResponse:
        return self.executor.search(query, limit=limit, offset=offset)

    def stats(self) -> Stats:
        return self.reporter.stats()

    def status(self) -> Status:
        return self.reporter.status()

    def run_maintenance(self, task: str) -> MaintenanceResult:
        return self.maintenance.run(task)

    def ingest(self, paths: Sequence[Path]) -> IngestStats:
        """Copy text files into the search directory and refresh the cache."""
        if self.ingestor is None:
            raise RuntimeError("Ingestion is disabled for this search engine")
        stats = self.ingestor.ingest(paths)
        self.cache.refresh()
        return stats
