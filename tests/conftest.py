"""Test setup for headinglinks."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from headinglinks.vault import FileSystemVault  # noqa: E402


@pytest.fixture
def make_vault(tmp_path: Path):
    """Create a vault directory from a mapping of note path to content."""

    def _make(notes: dict[str, str]) -> FileSystemVault:
        for name, content in notes.items():
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return FileSystemVault(tmp_path)

    return _make
