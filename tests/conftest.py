"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


class SyntheticError(Exception):
    """Error with a fixed message, used to build cause chains by hand."""


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    """Create a small text file."""
    path = tmp_path / "notes.txt"
    path.write_text("hello errortools\n", encoding="utf-8")
    return path


@pytest.fixture
def missing_file(tmp_path: Path) -> Path:
    """Path to a file that does not exist."""
    return tmp_path / "missing" / "my_file.txt"


@pytest.fixture
def three_link_chain() -> SyntheticError:
    """Build A caused by B caused by C, with C having no further cause."""
    c = SyntheticError("C")
    b = SyntheticError("B")
    b.__cause__ = c
    a = SyntheticError("A")
    a.__cause__ = b
    return a
