"""Shared fixtures for linesearch tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """A small search directory with nested and non-matching files."""
    root = tmp_path / "index"
    root.mkdir()
    (root / "alpha.txt").write_text("ab ab\nxyz\n", encoding="utf-8")
    (root / "beta.TXT").write_text("apple\nbanana apple\nApple pie\n", encoding="utf-8")
    (root / "notes.md").write_text("ab apple\n", encoding="utf-8")
    nested = root / "nested" / "deeper"
    nested.mkdir(parents=True)
    (nested / "gamma.txt").write_text("nothing here\nab\n", encoding="utf-8")
    (nested / "data.csv").write_text("ab,apple\n", encoding="utf-8")
    return root
