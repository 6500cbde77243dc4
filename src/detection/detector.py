"""Public language detector.

A detector borrows an explicit profile store and checks, once at attach
time, that the store is usable with its settings. Per call it only
reads immutable data, so one instance may serve many threads.
"""

from __future__ import annotations

import threading
from functools import partial
from typing import Iterable, Iterator

from core.constants import DEFAULT_CONFIDENCE_THRESHOLD, DEFAULT_MIN_MARGIN
from core.errors import LangRankConfigError
from core.logging_config import get_logger
from core.types import DetectionResult, DetectorSettings, LanguageScore
from detection.batch import iter_detections
from detection.scoring import decide, score_profiles
from ngrams.extractor import extract_vector
from ngrams.frequency_vector import FrequencyVector
from profiles.language_profile import LanguageProfile
from profiles.profile_store import ProfileStore

_LOGGER = get_logger(__name__)


class Detector:
    """Rank-distance language detector over a profile store."""

    def __init__(self, store: ProfileStore, settings: DetectorSettings | None = None) -> None:
        """Attach a detector to a store.

        Args:
            store: Loaded profile store.
            settings: Detection settings; defaults to ``DetectorSettings()``.

        Raises:
            LangRankConfigError: If the store is empty, or a profile was built
                with different n-gram sizes or cap than the settings.
        """
        self._store = store
        self._settings = settings or DetectorSettings()
        _check_store(store, self._settings)
        _LOGGER.info(
            "detector_attached",
            languages=list(store.languages),
            ngram_sizes=list(self._settings.ngram_sizes),
            cap=self._settings.cap,
        )

    @classmethod
    def from_store(
        cls,
        store: ProfileStore,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        min_margin: float = DEFAULT_MIN_MARGIN,
    ) -> "Detector":
        """Attach a detector using the n-gram sizes and cap the store was built with.

        Raises:
            LangRankConfigError: If the store is empty or its profiles disagree.
        """
        profiles = store.all_profiles()
        if not profiles:
            return cls(store)
        settings = DetectorSettings(
            ngram_sizes=profiles[0].ngram_sizes,
            cap=profiles[0].cap,
            confidence_threshold=confidence_threshold,
            min_margin=min_margin,
        )
        return cls(store, settings)

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def settings(self) -> DetectorSettings:
        return self._settings

    @property
    def languages(self) -> tuple[str, ...]:
        return self._store.languages

    def extract(self, text: str) -> FrequencyVector:
        """Build the query vector of a text with the store's configuration."""
        return extract_vector(text, self._settings.ngram_sizes, self._settings.cap)

    def score_languages(
        self,
        text: str,
        languages: Iterable[str] | None = None,
    ) -> tuple[LanguageScore, ...]:
        """Score candidate languages for a text, best first.

        Args:
            text: Input text.
            languages: Optional subset of store languages to consider.

        Returns:
            Sorted scores; empty when the text yields no n-gram.
        """
        query = self.extract(text)
        if query.is_empty():
            return ()
        return score_profiles(query, self._candidate_profiles(languages))

    def detect(self, text: str, languages: Iterable[str] | None = None) -> DetectionResult:
        """Detect the language of a text.

        Empty or letterless input never raises; it yields an unknown,
        non-confident result.

        Args:
            text: Input text.
            languages: Optional subset of store languages to consider.

        Returns:
            Ranked detection result.

        Raises:
            LangRankConfigError: If ``languages`` names a language missing
                from the store.
        """
        scores = self.score_languages(text, languages)
        result = decide(scores, self._settings)
        _LOGGER.debug(
            "language_detected",
            language=result.language,
            confidence=round(result.confidence, 4),
            confident=result.confident,
        )
        return result

    def detect_all(
        self,
        texts: Iterable[str],
        max_workers: int | None = None,
        cancel_event: threading.Event | None = None,
        languages: Iterable[str] | None = None,
    ) -> Iterator[DetectionResult]:
        """Lazily detect many texts, one result per input in input order.

        A partially consumed parallel iterator keeps its thread pool open
        until it is exhausted or closed; call ``close()`` when stopping early.

        Raises:
            LangRankConfigError: If ``languages`` names a language missing
                from the store.
        """
        restriction = self.resolve_languages(languages)
        return iter_detections(
            partial(self.detect, languages=restriction), texts, max_workers, cancel_event
        )

    def resolve_languages(self, languages: Iterable[str] | None) -> tuple[str, ...]:
        """Validate a candidate restriction against the store.

        Args:
            languages: Requested language codes; None or empty means all.

        Returns:
            Store languages kept by the restriction, in store order.

        Raises:
            LangRankConfigError: If a code is missing from the store.
        """
        if languages is None:
            return self._store.languages
        requested = set(languages)
        if not requested:
            return self._store.languages
        unknown = sorted(code for code in requested if code not in self._store)
        if unknown:
            raise LangRankConfigError(
                f"Unknown candidate languages: {', '.join(unknown)}. "
                f"Available languages: {', '.join(self._store.languages)}."
            )
        return tuple(code for code in self._store.languages if code in requested)

    def _candidate_profiles(self, languages: Iterable[str] | None) -> list[LanguageProfile]:
        resolved = self.resolve_languages(languages)
        return [profile for profile in self._store if profile.language_code in resolved]


def _check_store(store: ProfileStore, settings: DetectorSettings) -> None:
    """Validate store and settings compatibility once.

    Raises:
        LangRankConfigError: On an empty store or a size/cap mismatch.
    """
    if store.is_empty():
        raise LangRankConfigError(
            "Cannot build a detector over an empty profile store. "
            "Load at least one language profile."
        )
    for profile in store:
        if profile.ngram_sizes != settings.ngram_sizes or profile.cap != settings.cap:
            raise LangRankConfigError(
                f"Profile '{profile.language_code}' was built with ngram_sizes="
                f"{list(profile.ngram_sizes)} and cap={profile.cap}, but the detector uses "
                f"ngram_sizes={list(settings.ngram_sizes)} and cap={settings.cap}. "
                "Use the settings the profiles were trained with."
            )
