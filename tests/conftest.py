"""Pytest configuration for repository test runs."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def atlas_copy(tmp_path: Path) -> Path:
    """Writable copy of the fixture registry."""
    source_root = Path(__file__).resolve().parent / "fixtures" / "atlas"
    target_root = tmp_path / "atlas"
    shutil.copytree(source_root, target_root)
    return target_root
