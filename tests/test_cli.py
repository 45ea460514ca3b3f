"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from linesearch.cli import _setup_logging, app


runner = CliRunner()

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(output: str) -> str:
    return ANSI.sub("", output)


def _json(output: str) -> dict:
    return json.loads(_plain(output))


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("linesearch.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("linesearch.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_outputs_json(self, tmp_path: Path) -> None:
        (tmp_path / "doc.txt").write_text("ab ab\nxyz\n", encoding="utf-8")

        result = runner.invoke(app, ["search", "ab", "--root", str(tmp_path)])

        assert result.exit_code == 0
        data = _json(result.stdout)
        assert data["query"] == "ab"
        assert data["total"] == 1
        assert data["limit"] == 10
        assert data["offset"] == 0
        assert data["truncated"] is False
        [hit] = data["results"]
        assert hit["score"] == 27.0
        assert hit["id"] == "0-1"
        assert hit["title"] == "doc.txt (line 1)"
        assert set(hit) == {"id", "title", "content", "score", "path", "line_number", "indexed_at"}

    def test_search_pagination_options(self, tmp_path: Path) -> None:
        (tmp_path / "doc.txt").write_text("\n".join(["match"] * 5), encoding="utf-8")

        result = runner.invoke(
            app, ["search", "match", "--limit", "2", "--offset", "4", "--root", str(tmp_path)]
        )

        assert result.exit_code == 0
        data = _json(result.stdout)
        assert data["total"] == 5
        assert len(data["results"]) == 1

    def test_search_rejects_negative_limit(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["search", "x", "--limit", "-1", "--root", str(tmp_path)])
        assert result.exit_code != 0

    def test_search_table(self, tmp_path: Path) -> None:
        (tmp_path / "doc.txt").write_text("ab ab\n", encoding="utf-8")

        result = runner.invoke(app, ["search", "ab", "--table", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert "27.0" in _plain(result.stdout)
        assert "Showing 1-1 of 1" in _plain(result.stdout)

    def test_search_table_no_results(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["search", "zebra", "--table", "--root", str(tmp_path)])

        assert result.exit_code == 0
        assert "No matches found" in _plain(result.stdout)

    def test_search_directory_from_environment(self, tmp_path: Path, monkeypatch) -> None:
        root = tmp_path / "env-root"
        monkeypatch.setenv("SEARCH_DIRECTORY", str(root))

        result = runner.invoke(app, ["search", "anything"])

        assert result.exit_code == 0
        assert root.is_dir()

    def test_root_creation_failure_exits_non_zero(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        result = runner.invoke(app, ["search", "x", "--root", str(blocker)])

        assert result.exit_code == 1


class TestStatsAndStatusCommands:
    """Tests for the stats and status commands."""

    def test_stats(self, corpus: Path) -> None:
        result = runner.invoke(app, ["stats", "--root", str(corpus)])

        assert result.exit_code == 0
        data = _json(result.stdout)
        assert data["total_documents"] == 3
        assert data["index_size_bytes"] > 0
        assert data["search_path"] == str(corpus)
        assert "last_updated" in data

    def test_status(self, corpus: Path) -> None:
        result = runner.invoke(app, ["status", "--root", str(corpus)])

        assert result.exit_code == 0
        data = _json(result.stdout)
        assert data["index_exists"] is True
        assert data["index_healthy"] is True
        assert data["total_documents"] == 3

    def test_status_creates_missing_root(self, tmp_path: Path) -> None:
        root = tmp_path / "new"

        result = runner.invoke(app, ["status", "--root", str(root)])

        assert result.exit_code == 0
        assert _json(result.stdout)["total_documents"] == 0
        assert root.is_dir()


class TestMaintenanceCommand:
    """Tests for the maintenance command."""

    def test_cleanup(self, corpus: Path) -> None:
        result = runner.invoke(app, ["maintenance", "cleanup", "--root", str(corpus)])

        assert result.exit_code == 0
        data = _json(result.stdout)
        assert data["task"] == "cleanup"
        assert data["success"] is True

    def test_clear_all(self, corpus: Path) -> None:
        result = runner.invoke(app, ["maintenance", "clear-all", "--root", str(corpus)])

        assert result.exit_code == 0
        assert _json(result.stdout)["message"] == "Removed 3 files from search directory"
        assert not (corpus / "alpha.txt").exists()

    def test_unknown_task_is_not_a_process_failure(self, corpus: Path) -> None:
        result = runner.invoke(app, ["maintenance", "defrag", "--root", str(corpus)])

        assert result.exit_code == 0
        data = _json(result.stdout)
        assert data["success"] is False
        assert data["message"] == "Unknown maintenance task: defrag"


class TestAddCommand:
    """Tests for the add command."""

    def test_add_files(self, tmp_path: Path) -> None:
        root = tmp_path / "index"
        incoming = tmp_path / "incoming"
        incoming.mkdir()
        (incoming / "a.txt").write_text("alpha", encoding="utf-8")
        (incoming / "b.txt").write_text("", encoding="utf-8")

        result = runner.invoke(app, ["add", str(incoming), "--root", str(root)])

        assert result.exit_code == 0
        assert "Ingested: 1, failed: 1" in _plain(result.stdout)
        assert len(list(root.glob("a-*.txt"))) == 1

    def test_add_nothing_found(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        result = runner.invoke(app, ["add", str(empty), "--root", str(tmp_path / "index")])

        assert result.exit_code == 0
        assert "No text files found" in _plain(result.stdout)


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_server(self, tmp_path: Path) -> None:
        """Starts uvicorn server with correct parameters."""
        with patch("uvicorn.run") as mock_uvicorn_run:
            result = runner.invoke(
                app, ["web", "--host", "0.0.0.0", "--port", "9000", "--root", str(tmp_path)]
            )
            assert result.exit_code == 0
            mock_uvicorn_run.assert_called_once()
            call_kwargs = mock_uvicorn_run.call_args[1]
            assert call_kwargs["host"] == "0.0.0.0"
            assert call_kwargs["port"] == 9000

    def test_web_warns_missing_directory(self, tmp_path: Path) -> None:
        with patch("uvicorn.run"):
            result = runner.invoke(app, ["web", "--root", str(tmp_path / "missing")])
            assert result.exit_code == 0
            assert "search directory not found" in _plain(result.stdout).lower()
