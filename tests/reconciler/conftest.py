"""Shared fixtures for pkgdrift tests."""

from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty consuming project directory (no package.json, no node_modules)."""
    root = tmp_path / "project"
    root.mkdir()
    return root
