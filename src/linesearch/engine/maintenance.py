"""Named housekeeping tasks over the document cache and search directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Union

from linesearch.engine.cache import DocumentCache
from linesearch.models import MaintenanceResult

LOGGER = logging.getLogger(__name__)

REFRESHED_MESSAGE = "File cache refreshed successfully"


class MaintenanceTask(str, Enum):
    CLEANUP = "cleanup"
    UPDATE_STATS = "update-stats"
    CLEAR_ALL = "clear-all"


@dataclass(slots=True, frozen=True)
class UnrecognizedTask:
    name: str


TaskRequest = Union[MaintenanceTask, UnrecognizedTask]


def parse_task(name: str) -> TaskRequest:
    try:
        return MaintenanceTask(name)
    except ValueError:
        return UnrecognizedTask(name)


@dataclass(slots=True)
class RemovalOutcome:
    path: Path
    removed: bool
    error: str | None = None


def remove_file(path: Path) -> RemovalOutcome:
    try:
        path.unlink()
    except OSError as exc:
        LOGGER.error("Failed to remove file %s: %s", path, exc)
        return RemovalOutcome(path=path, removed=False, error=str(exc))
    return RemovalOutcome(path=path, removed=True)


class MaintenanceRunner:
    """Runs maintenance tasks; unknown task names are reported, never raised."""

    def __init__(self, cache: DocumentCache) -> None:
        self.cache = cache

    def run(self, task: str) -> MaintenanceResult:
        request = parse_task(task)
        if isinstance(request, UnrecognizedTask):
            LOGGER.warning("Unknown maintenance task: %s", request.name)
            return MaintenanceResult(
                task=task,
                success=False,
                message=f"Unknown maintenance task: {request.name}",
            )

        LOGGER.info("Running maintenance task: %s", request.value)
        if request is MaintenanceTask.CLEAR_ALL:
            outcomes = self.clear_all()
            removed = sum(1 for outcome in outcomes if outcome.removed)
            return MaintenanceResult(
                task=task,
                success=True,
                message=f"Removed {removed} files from search directory",
            )

        # cleanup and update-stats are the same refresh
        self.cache.refresh()
        return MaintenanceResult(task=task, success=True, message=REFRESHED_MESSAGE)

    def clear_all(self) -> List[RemovalOutcome]:
        """Delete every cached document, then rescan whatever is left."""
        outcomes = [remove_file(document.path) for document in self.cache.documents]
        self.cache.refresh()
        return outcomes
