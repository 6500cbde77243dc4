"""Unit tests for rank-distance scoring."""

from __future__ import annotations

import pytest

from core.types import DetectorSettings, LanguageScore
from detection.scoring import decide, distance_to_confidence, rank_distance
from ngrams.frequency_vector import FrequencyVector


def _vector(*ngrams: str, cap: int = 10) -> FrequencyVector:
    return FrequencyVector.from_ranked(list(ngrams), (1,), cap)


def test_rank_distance_sums_rank_differences() -> None:
    """Shared n-grams contribute their absolute rank difference."""
    assert rank_distance(_vector("a", "b"), _vector("b", "a")) == pytest.approx(1.0)


def test_rank_distance_penalizes_absent_ngrams_with_cap() -> None:
    """N-grams missing from the profile cost the full cap."""
    assert rank_distance(_vector("z", "a"), _vector("a")) == pytest.approx((10 + 1) / 2)


def test_rank_distance_is_zero_for_identical_vectors() -> None:
    """A query identical to the profile has no distance."""
    assert rank_distance(_vector("a", "b", "c"), _vector("a", "b", "c")) == 0.0


def test_distance_to_confidence_maps_into_unit_interval() -> None:
    """Zero distance maps to 1 and the full penalty maps to 0."""
    assert distance_to_confidence(0.0, 300) == 1.0
    assert distance_to_confidence(300.0, 300) == 0.0
    assert distance_to_confidence(150.0, 300) == pytest.approx(0.5)


def test_decide_requires_threshold_and_margin() -> None:
    """Near ties should not be confident even above the threshold."""
    settings = DetectorSettings(confidence_threshold=0.5, min_margin=0.1)
    near_tie = (
        LanguageScore("en", 60.0, 0.80),
        LanguageScore("fr", 66.0, 0.78),
    )

    result = decide(near_tie, settings)

    assert result.language == "en"
    assert result.margin == pytest.approx(0.02)
    assert result.confident is False


def test_decide_single_candidate_margin_is_its_confidence() -> None:
    """Without a runner-up, the margin equals the best confidence."""
    result = decide((LanguageScore("en", 30.0, 0.9),), DetectorSettings())

    assert result.margin == pytest.approx(0.9) and result.confident is True


def test_decide_without_scores_returns_unknown() -> None:
    """No candidate means an unknown, non-confident result."""
    result = decide((), DetectorSettings())

    assert result.is_unknown and result.confident is False
