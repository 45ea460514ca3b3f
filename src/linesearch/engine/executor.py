"""Streaming line search over the document cache."""

from __future__ import annotations

import logging
from typing import Iterator, List, Tuple

from linesearch.config import DEFAULT_READ_BUFFER_BYTES
from linesearch.engine.cache import DocumentCache
from linesearch.engine.scoring import score
from linesearch.models import Document, Hit, SearchResponse, utcnow
from linesearch.utils.text import iter_lines

LOGGER = logging.getLogger(__name__)

LARGE_TARGET = 10_000
LARGE_TARGET_SLACK = 20_000
SMALL_TARGET_FACTOR = 3


def early_stop_threshold(limit: int, offset: int) -> int:
    """Number of hits after which scanning stops.

    Windows ending past 10000 get a fixed slack of 20000 hits, smaller
    windows collect three times their end offset.
    """
    target = offset + limit
    if target > LARGE_TARGET:
        return target + LARGE_TARGET_SLACK
    return target * SMALL_TARGET_FACTOR


class QueryExecutor:
    """Case-insensitive substring search with ranking and pagination."""

    def __init__(
        self, cache: DocumentCache, *, read_buffer_bytes: int = DEFAULT_READ_BUFFER_BYTES
    ) -> None:
        self.cache = cache
        self.read_buffer_bytes = read_buffer_bytes

    def search(self, query: str, limit: int = 10, offset: int = 0) -> SearchResponse:
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")

        query_lower = query.lower()
        threshold = early_stop_threshold(limit, offset)
        hits: List[Hit] = []
        truncated = False

        documents = self.cache.documents
        for doc_index, document in enumerate(documents):
            try:
                found, cut_short = self._scan(
                    document, doc_index, query_lower, threshold - len(hits)
                )
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.warning("Failed to search file %s: %s", document.path, exc)
                continue
            hits.extend(found)
            if len(hits) >= threshold:
                # exact only if nothing was left unread
                truncated = cut_short or doc_index < len(documents) - 1
                LOGGER.debug("Early stop after %d hits (threshold %d)", len(hits), threshold)
                break

        # list.sort is stable, so ties keep discovery order
        hits.sort(key=lambda hit: hit.score, reverse=True)
        return SearchResponse(
            query=query,
            results=hits[offset : offset + limit],
            total=len(hits),
            limit=limit,
            offset=offset,
            truncated=truncated,
        )

    def _scan(
        self, document: Document, doc_index: int, query: str, budget: int
    ) -> Tuple[List[Hit], bool]:
        """Collect hits from one document, stopping once ``budget`` is used up.

        The flag is true when the scan stopped with lines still unread.
        """
        found: List[Hit] = []
        path = str(document.path)
        lines = iter_lines(document.path, buffer_size=self.read_buffer_bytes)
        try:
            for line_number, line in enumerate(lines, start=1):
                line_lower = line.lower()
                if query not in line_lower:
                    continue
                found.append(
                    Hit(
                        id=f"{doc_index}-{line_number}",
                        title=f"{document.name} (line {line_number})",
                        content=line,
                        score=score(line_lower, query),
                        path=path,
                        line_number=line_number,
                        indexed_at=utcnow(),
                    )
                )
                if len(found) >= budget:
                    return found, _has_more(lines)
        finally:
            lines.close()
        return found, False


def _has_more(lines: Iterator[str]) -> bool:
    try:
        return next(lines, None) is not None
    except (OSError, UnicodeDecodeError):
        # unreadable remainder still counts as unscanned
        return True
