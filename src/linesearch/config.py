"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

SEARCH_DIRECTORY_ENV = "SEARCH_DIRECTORY"
DEFAULT_SEARCH_DIRECTORY = "index"
DEFAULT_EXTENSION = "txt"
DEFAULT_READ_BUFFER_BYTES = 4 * 1024 * 1024
DEFAULT_MAX_INGEST_BYTES = 10 * 1024 * 1024


@dataclass(slots=True)
class AppConfig:
    search_dir: Path | None = None
    extension: str = DEFAULT_EXTENSION
    read_buffer_bytes: int = DEFAULT_READ_BUFFER_BYTES
    max_ingest_bytes: int = DEFAULT_MAX_INGEST_BYTES

    def __post_init__(self) -> None:
        if self.search_dir is None:
            self.search_dir = Path(DEFAULT_SEARCH_DIRECTORY)
        self.extension = self.extension.lstrip(".").lower()

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, *, search_dir: Path | None = None
    ) -> "AppConfig":
        """Build a config, taking the search directory from ``SEARCH_DIRECTORY`` unless given."""
        env = os.environ if environ is None else environ
        if search_dir is None:
            search_dir = Path(env.get(SEARCH_DIRECTORY_ENV) or DEFAULT_SEARCH_DIRECTORY)
        return cls(search_dir=search_dir)

    def resolve_search_dir(self, base_dir: Path | None = None) -> Path:
        if self.search_dir is None:
            self.search_dir = Path(DEFAULT_SEARCH_DIRECTORY)
        if Path(self.search_dir).is_absolute() or base_dir is None:
            return Path(self.search_dir)
        return base_dir / self.search_dir
