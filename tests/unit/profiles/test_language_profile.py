"""Unit tests for language profile validation."""

from __future__ import annotations

import pytest

from core.errors import ProfileFormatError
from profiles.language_profile import LanguageProfile


def test_from_entries_orders_ngrams_by_rank() -> None:
    """Entries may arrive in any order; the vector follows the ranks."""
    profile = LanguageProfile.from_entries("en", (1,), 5, [("b", 1), ("a", 0)])

    assert profile.vector.ngrams == ("a", "b")
    assert profile.entries() == [("a", 0), ("b", 1)]


@pytest.mark.parametrize(
    "entries",
    [
        [("a", 0), ("b", 2)],
        [("a", 0), ("b", 0)],
        [("a", 1)],
        [("a", "0")],
        [],
    ],
)
def test_from_entries_rejects_invalid_ranks(entries: list[tuple[str, object]]) -> None:
    """Ranks must be unique integers, contiguous from 0, and present."""
    with pytest.raises(ProfileFormatError):
        LanguageProfile.from_entries("en", (1,), 5, entries)  # type: ignore[arg-type]


def test_from_entries_rejects_repeated_ngram() -> None:
    """The same n-gram may not hold two ranks."""
    with pytest.raises(ProfileFormatError):
        LanguageProfile.from_entries("en", (1,), 5, [("a", 0), ("a", 1)])


@pytest.mark.parametrize("language_code", ["English", "EN", "e", ""])
def test_profile_rejects_invalid_language_code(language_code: str) -> None:
    """Language codes must look like ISO 639 tags."""
    with pytest.raises(ProfileFormatError):
        LanguageProfile.from_entries(language_code, (1,), 5, [("a", 0)])


def test_profile_accepts_region_subtag() -> None:
    """Region subtags such as pt-BR should be accepted."""
    profile = LanguageProfile.from_entries("pt-BR", (1,), 5, [("a", 0)])

    assert profile.language_code == "pt-BR"


def test_profile_rejects_ngram_outside_declared_sizes() -> None:
    """Every n-gram length must be one of the declared sizes."""
    with pytest.raises(ProfileFormatError):
        LanguageProfile.from_entries("en", (1, 2), 5, [("abc", 0)])


def test_profile_rejects_more_entries_than_cap() -> None:
    """A profile cannot exceed its declared cap."""
    with pytest.raises(ProfileFormatError):
        LanguageProfile.from_entries("en", (1,), 2, [("a", 0), ("b", 1), ("c", 2)])


def test_profile_rejects_invalid_cap() -> None:
    """Malformed caps surface as profile format errors."""
    with pytest.raises(ProfileFormatError):
        LanguageProfile.from_entries("en", (1,), 0, [("a", 0)])
