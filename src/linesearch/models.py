"""Core linesearch data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from linesearch.utils.files import file_size


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class Document:
    """A searchable file, identified by its absolute path."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def size(self) -> int | None:
        """Size in bytes, or ``None`` when the file can no longer be stat'ed."""
        return file_size(self.path)


@dataclass(slots=True)
class Hit:
    """One matching line within a document."""

    id: str
    title: str
    content: str
    score: float
    path: str
    line_number: int
    indexed_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "score": self.score,
            "path": self.path,
            "line_number": self.line_number,
            "indexed_at": self.indexed_at.isoformat(),
        }


@dataclass(slots=True)
class SearchResponse:
    """A page of hits plus the size of the collected result set.

    ``total`` counts the hits collected before pagination. When ``truncated``
    is set, scanning stopped at the early-stop threshold with lines or
    documents still unread, so ``total`` may be lower than the number of
    matching lines in the corpus.
    """

    query: str
    results: List[Hit]
    total: int
    limit: int
    offset: int
    truncated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "results": [hit.to_dict() for hit in self.results],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "truncated": self.truncated,
        }


@dataclass(slots=True)
class Stats:
    total_documents: int
    index_size_bytes: int
    last_updated: datetime
    search_path: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_documents": self.total_documents,
            "index_size_bytes": self.index_size_bytes,
            "last_updated": self.last_updated.isoformat(),
            "search_path": self.search_path,
        }


@dataclass(slots=True)
class Status:
    index_exists: bool
    index_healthy: bool
    total_documents: int
    index_size_bytes: int
    last_updated: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index_exists": self.index_exists,
            "index_healthy": self.index_healthy,
            "total_documents": self.total_documents,
            "index_size_bytes": self.index_size_bytes,
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass(slots=True)
class MaintenanceResult:
    task: str
    success: bool
    message: str
    executed_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.task,
            "success": self.success,
            "message": self.message,
            "executed_at": self.executed_at.isoformat(),
        }
