"""Pytest configuration for repository test runs."""

from __future__ import annotations

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
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove LangRank environment overrides for the duration of a test."""
    for variable in (
        "LANGRANK_PROFILES",
        "LANGRANK_CONFIDENCE_THRESHOLD",
        "LANGRANK_MIN_MARGIN",
    ):
        monkeypatch.delenv(variable, raising=False)
    return monkeypatch
