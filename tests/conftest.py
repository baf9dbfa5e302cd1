"""
Root test configuration and fixtures for envbind.

Tests never depend on the real process environment or on an
``app.properties`` in the working directory: sources are injected as
mappings, and tests that exercise the default entry points run inside a
temporary directory with a scrubbed environment.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures.settings import SETTINGS_KEYS  # noqa: E402


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every key the shared settings classes read."""
    for key in SETTINGS_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty directory so app.properties is under test control."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_properties(workdir):
    """Write a properties file into the working directory and return its path."""

    def _write(content: str, name: str = "app.properties") -> Path:
        path = workdir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
