"""Unit tests for the read-only profile store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.errors import LangRankConfigError, LangRankLoadError
from profiles.profile_io import profile_to_dict, write_profiles
from profiles.profile_store import ProfileStore
from tests.sample_profiles import build_store


def test_store_orders_profiles_by_language_code() -> None:
    """Iteration order should be stable and sorted."""
    store = build_store("ru", "en", "fr")

    assert store.languages == ("en", "fr", "ru")
    assert [profile.language_code for profile in store.all_profiles()] == ["en", "fr", "ru"]


def test_store_get_returns_none_for_unknown_language() -> None:
    """Lookups of absent languages should return None."""
    store = build_store("en")

    assert store.get("en") is not None and store.get("de") is None
    assert "en" in store and "de" not in store


def test_store_load_reads_profile_file(tmp_path: Path) -> None:
    """Loading a written store should give the same languages."""
    profile_path = tmp_path / "profiles.jsonl"
    build_store("en", "fr").save(profile_path)

    store = ProfileStore.load(profile_path)

    assert store.languages == ("en", "fr") and len(store) == 2


def test_store_load_rejects_duplicate_languages(tmp_path: Path) -> None:
    """The same language twice in one source is a load error."""
    profile = build_store("en").get("en")
    assert profile is not None
    profile_path = tmp_path / "profiles.jsonl"
    write_profiles([profile, profile], profile_path)

    with pytest.raises(LangRankLoadError):
        ProfileStore.load(profile_path)


def test_store_load_is_all_or_nothing(tmp_path: Path) -> None:
    """One malformed record should fail the whole load."""
    profile = build_store("en").get("en")
    assert profile is not None
    profile_path = tmp_path / "profiles.jsonl"
    broken = {"language_code": "fr", "ngram_sizes": [1], "cap": 5, "entries": []}
    profile_path.write_text(
        json.dumps(profile_to_dict(profile)) + "\n" + json.dumps(broken) + "\n",
        encoding="utf-8",
    )

    with pytest.raises(LangRankLoadError):
        ProfileStore.load(profile_path)


def test_store_merge_combines_sources() -> None:
    """Merging stores should expose every language once."""
    merged = ProfileStore.merge(build_store("en", "fr"), build_store("ru"))

    assert merged.languages == ("en", "fr", "ru")


def test_store_merge_rejects_duplicate_languages() -> None:
    """Two sources providing the same language cannot be merged."""
    with pytest.raises(LangRankConfigError):
        ProfileStore.merge(build_store("en"), build_store("en"))


def test_empty_store_is_allowed_until_detection() -> None:
    """An empty store is a valid object; detectors reject it."""
    store = ProfileStore()

    assert store.is_empty() and len(store) == 0
