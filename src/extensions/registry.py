"""Detector composition.

``compose`` wraps a base detector with ordered candidate filters, and
``ExtensionRegistry`` additionally merges extra profile sources into
the base store. Neither touches the base detector or keeps global state.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from functools import partial
from typing import Iterable, Iterator, Sequence

from core.logging_config import get_logger
from core.types import DetectionResult
from detection.batch import iter_detections
from detection.detector import Detector
from extensions.filters import FilterLike, apply_filter, filter_name
from profiles.profile_store import ProfileStore

_LOGGER = get_logger(__name__)


class FilteredDetector:
    """Detector wrapper that prunes candidates before scoring.

    If a filter eliminates every candidate, scoring falls back to the
    unfiltered candidate set (still within any caller restriction) and
    the result names that filter.
    """

    def __init__(self, base: Detector, filters: Sequence[FilterLike] = ()) -> None:
        self._base = base
        self._filters = tuple(filters)

    @property
    def base(self) -> Detector:
        return self._base

    @property
    def filters(self) -> tuple[FilterLike, ...]:
        return self._filters

    @property
    def languages(self) -> tuple[str, ...]:
        return self._base.languages

    def candidates(
        self,
        text: str,
        languages: Iterable[str] | None = None,
    ) -> tuple[tuple[str, ...], str | None]:
        """Apply filters in order, starting from an optional restriction.

        Filters only narrow the restricted set; a fallback never widens it.

        Args:
            text: Input text.
            languages: Optional subset of store languages to consider.

        Returns:
            Remaining candidates and the name of the filter that emptied
            the set, in which case the candidates are the whole restricted set.

        Raises:
            LangRankConfigError: If ``languages`` names a language missing
                from the store.
        """
        all_languages = self._base.resolve_languages(languages)
        candidates = all_languages
        for candidate_filter in self._filters:
            candidates = apply_filter(candidate_filter, text, candidates)
            if not candidates:
                name = filter_name(candidate_filter)
                _LOGGER.warning("filter_fallback", filter=name, languages=list(all_languages))
                return all_languages, name
        return candidates, None

    def detect(self, text: str, languages: Iterable[str] | None = None) -> DetectionResult:
        """Detect the language of a text over the filtered candidates."""
        candidates, fallback_filter = self.candidates(text, languages)
        result = self._base.detect(text, candidates)
        if fallback_filter is None:
            return result
        return replace(result, fallback_filter=fallback_filter)

    def detect_all(
        self,
        texts: Iterable[str],
        max_workers: int | None = None,
        cancel_event: threading.Event | None = None,
        languages: Iterable[str] | None = None,
    ) -> Iterator[DetectionResult]:
        """Lazily detect many texts, one result per input in input order.

        Call ``close()`` on the iterator when stopping early so the worker
        pool shuts down promptly.
        """
        restriction = self._base.resolve_languages(languages)
        return iter_detections(
            partial(self.detect, languages=restriction), texts, max_workers, cancel_event
        )


def compose(base_detector: Detector, filters: Sequence[FilterLike]) -> FilteredDetector:
    """Wrap a detector with filters applied in order before scoring."""
    return FilteredDetector(base_detector, filters)


class ExtensionRegistry:
    """Collect extra profile sources and filters for one composition.

    Registries are plain instances; create one per detector setup.
    """

    def __init__(self) -> None:
        self._stores: list[ProfileStore] = []
        self._filters: list[FilterLike] = []

    def add_profiles(self, store: ProfileStore) -> "ExtensionRegistry":
        self._stores.append(store)
        return self

    def add_filter(self, candidate_filter: FilterLike) -> "ExtensionRegistry":
        self._filters.append(candidate_filter)
        return self

    @property
    def filters(self) -> tuple[FilterLike, ...]:
        return tuple(self._filters)

    def compose(self, base_detector: Detector) -> FilteredDetector:
        """Build a filtered detector over the base store plus extra profiles.

        The merged detector reuses the base detector's settings, so extra
        profiles must share its n-gram sizes and cap.

        Raises:
            LangRankConfigError: If an extra source repeats a language or
                was built with different sizes or cap.
        """
        detector = base_detector
        if self._stores:
            merged = ProfileStore.merge(base_detector.store, *self._stores)
            detector = Detector(merged, base_detector.settings)
        return compose(detector, self._filters)
