"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import LangRankConfig
from core.errors import LangRankConfigError


def test_from_env_reads_profiles_path(clean_env: pytest.MonkeyPatch) -> None:
    """Config should resolve the profile source from environment."""
    clean_env.setenv("LANGRANK_PROFILES", "./.tmp-profiles.jsonl")

    config = LangRankConfig.from_env()

    assert config.profiles_path is not None and config.profiles_path.name == ".tmp-profiles.jsonl"


def test_from_env_uses_defaults_without_overrides(clean_env: pytest.MonkeyPatch) -> None:
    """Config should fall back to default thresholds and no profile source."""
    config = LangRankConfig.from_env()

    assert config.profiles_path is None
    assert config.confidence_threshold == pytest.approx(0.35)
    assert config.min_margin == pytest.approx(0.05)


def test_from_env_raises_for_invalid_threshold(clean_env: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric confidence threshold."""
    clean_env.setenv("LANGRANK_CONFIDENCE_THRESHOLD", "very-sure")

    with pytest.raises(LangRankConfigError):
        LangRankConfig.from_env()
