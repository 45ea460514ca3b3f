"""Command line interface for linesearch."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from linesearch.config import AppConfig
from linesearch.engine.search_engine import SearchEngine
from linesearch.web.app import app as web_app


LOGGER = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="linesearch - ranked full-text line search over a text directory")

ROOT_OPTION_HELP = "Search directory (defaults to $SEARCH_DIRECTORY or ./index)"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _open_engine(root: Optional[Path]) -> SearchEngine:
    config = AppConfig.from_env(search_dir=root)
    resolved = config.resolve_search_dir(Path.cwd())
    try:
        return SearchEngine.from_config(config, Path.cwd())
    except OSError as exc:
        err_console.print(f"[red]Failed to create search directory {resolved}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def _print_json(payload: Dict[str, Any]) -> None:
    console.print_json(json.dumps(payload))


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    limit: int = typer.Option(10, "--limit", "-l", min=0, help="Maximum number of results"),
    offset: int = typer.Option(0, "--offset", "-o", min=0, help="Number of results to skip"),
    table: bool = typer.Option(False, "--table", help="Render a table instead of JSON"),
    root: Path = typer.Option(None, "--root", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search every document for lines containing QUERY."""
    _setup_logging(verbose)
    engine = _open_engine(root)
    LOGGER.info("Searching for: %s", query)
    response = engine.search(query, limit=limit, offset=offset)

    if not table:
        _print_json(response.to_dict())
        return

    if not response.results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    results_table = Table(show_header=True, header_style="bold magenta")
    results_table.add_column("Score")
    results_table.add_column("Document")
    results_table.add_column("Content")
    for hit in response.results:
        results_table.add_row(f"{hit.score:.1f}", hit.title, hit.content[:180])
    console.print(results_table)

    shown = f"{offset + 1}-{offset + len(response.results)}"
    suffix = " (scan stopped early, total is approximate)" if response.truncated else ""
    console.print(f"Showing {shown} of {response.total}{suffix}")


@app.command()
def stats(
    root: Path = typer.Option(None, "--root", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show document count, total size and last scan time."""
    _setup_logging(verbose)
    _print_json(_open_engine(root).stats().to_dict())


@app.command()
def status(
    root: Path = typer.Option(None, "--root", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show search directory health."""
    _setup_logging(verbose)
    _print_json(_open_engine(root).status().to_dict())


@app.command()
def maintenance(
    task: str = typer.Argument(..., help="cleanup, update-stats or clear-all"),
    root: Path = typer.Option(None, "--root", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a maintenance task."""
    _setup_logging(verbose)
    _print_json(_open_engine(root).run_maintenance(task).to_dict())


@app.command()
def add(
    inputs: List[Path] = typer.Argument(
        ..., help="Text files or directories to copy into the search directory", resolve_path=True
    ),
    root: Path = typer.Option(None, "--root", help=ROOT_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Copy text documents into the search directory."""
    _setup_logging(verbose)
    engine = _open_engine(root)
    console.print(f"Adding documents to [bold]{engine.root}[/bold]...")
    result = engine.ingest(inputs)
    if not result.processed_files:
        console.print("[yellow]No text files found.[/yellow]")
        return
    console.print(f"Ingested: {result.ingested}, failed: {result.failed}")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    root: Path = typer.Option(None, "--root", help=ROOT_OPTION_HELP),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig.from_env(search_dir=root)
    resolved = config.resolve_search_dir(Path.cwd())
    if root is not None:
        web_app.state.search_dir = resolved
    if not resolved.exists():
        console.print("[yellow]Warning: search directory not found, it will be created.[/yellow]")

    console.print(f"Starting web interface on http://{host}:{port} (search directory: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


def main() -> None:
    app()
