"""Shared fixture path helpers for tests."""

from __future__ import annotations

from pathlib import Path


def fixture_path(relative_path: str) -> Path:
    """Resolve a fixture path relative to tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    tests_root = Path(__file__).resolve().parent
    return tests_root / "fixtures" / relative_path


def corpus_text(language_code: str) -> str:
    """Read the single fixture corpus document of a language.

    Args:
        language_code: Corpus subdirectory name.

    Returns:
        Corpus text as used for training.
    """
    return fixture_path(f"corpus/{language_code}/sessions.txt").read_text(encoding="utf-8")
