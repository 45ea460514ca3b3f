"""FastAPI application exposing the search engine over HTTP."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, Callable, List, TypeVar

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from linesearch.config import AppConfig
from linesearch.engine.maintenance import MaintenanceTask
from linesearch.engine.search_engine import SearchEngine

LOGGER = logging.getLogger(__name__)

MAX_LIMIT = 1000

T = TypeVar("T")

app = FastAPI(title="linesearch", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# One engine per process; every call on it goes through this lock.
_ENGINE_LOCK = threading.Lock()


class SearchPayload(BaseModel):
    query: str
    limit: int = 10
    offset: int = Field(default=0, ge=0)


class MaintenancePayload(BaseModel):
    task: str


class IngestPayload(BaseModel):
    paths: List[str]


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def get_engine() -> SearchEngine:
    """Return the process-wide engine, creating it on first use."""
    with _ENGINE_LOCK:
        engine = getattr(app.state, "engine", None)
        if engine is None:
            config = AppConfig.from_env(search_dir=getattr(app.state, "search_dir", None))
            try:
                engine = SearchEngine.from_config(config, Path.cwd())
            except OSError as exc:
                LOGGER.error("Unable to create search directory: %s", exc)
                raise HTTPException(
                    status_code=500, detail=f"Unable to create search directory: {exc}"
                ) from exc
            app.state.engine = engine
        return engine


async def _run_locked(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    def _call() -> T:
        with _ENGINE_LOCK:
            return func(*args, **kwargs)

    return await asyncio.to_thread(_call)


@app.post("/search")
async def search_documents(
    payload: SearchPayload, engine: SearchEngine = Depends(get_engine)
) -> dict[str, Any]:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    limit = max(1, min(payload.limit, MAX_LIMIT))
    response = await _run_locked(engine.search, query, limit, payload.offset)
    LOGGER.info("Search for %r returned %d of %d hits", query, len(response.results), response.total)

    body = response.to_dict()
    body["pagination"] = {
        "has_more": payload.offset + limit < response.total,
        "next_offset": payload.offset + limit,
    }
    return body


@app.get("/stats")
async def get_stats(engine: SearchEngine = Depends(get_engine)) -> dict[str, Any]:
    stats = await _run_locked(engine.stats)
    return stats.to_dict()


@app.get("/status")
async def get_status(engine: SearchEngine = Depends(get_engine)) -> dict[str, Any]:
    status = await _run_locked(engine.status)
    return status.to_dict()


@app.post("/maintenance")
async def run_maintenance(
    payload: MaintenancePayload, engine: SearchEngine = Depends(get_engine)
) -> dict[str, Any]:
    result = await _run_locked(engine.run_maintenance, payload.task)
    return result.to_dict()


@app.post("/documents")
async def ingest_documents(
    payload: IngestPayload, engine: SearchEngine = Depends(get_engine)
) -> dict[str, Any]:
    paths = [p.strip().replace("\r", "").replace("\n", "") for p in payload.paths]
    paths = [p for p in paths if p]
    if not paths:
        raise HTTPException(status_code=400, detail="No path provided")
    if any("\0" in p for p in paths):
        raise HTTPException(status_code=400, detail="Invalid path: contains null byte")

    resolved = [Path(p).expanduser() for p in paths]
    stats = await _run_locked(engine.ingest, resolved)
    return {"status": "ok", "stats": stats.to_dict()}


@app.delete("/documents")
async def clear_documents(engine: SearchEngine = Depends(get_engine)) -> dict[str, Any]:
    result = await _run_locked(engine.run_maintenance, MaintenanceTask.CLEAR_ALL.value)
    return result.to_dict()
