"""Candidate filters applied before distance scoring.

A filter reduces the candidate languages for a text. Filters are
pure: they never mutate shared state, so composed detectors stay
safe for concurrent use.
"""

from __future__ import annotations

from typing import Callable, Iterable, Protocol

from core.errors import LangRankConfigError
from extensions.scripts import dominant_scripts, scripts_for_language

DEFAULT_SCRIPT_MIN_SHARE = 0.2


class CandidateFilter(Protocol):
    """Capability interface for pre-scoring candidate reduction."""

    name: str

    def reduce(self, text: str, candidates: tuple[str, ...]) -> Iterable[str]:
        """Return the subset of candidates compatible with the text."""
        ...


FilterLike = CandidateFilter | Callable[[str, tuple[str, ...]], Iterable[str]]


class ScriptFilter:
    """Drop languages whose writing systems do not appear in the text.

    Languages without a known script mapping are always kept, and text
    without letters leaves the candidates untouched.
    """

    name = "script"

    def __init__(self, min_share: float = DEFAULT_SCRIPT_MIN_SHARE) -> None:
        if not 0.0 < min_share <= 1.0:
            raise LangRankConfigError(
                f"Invalid script min_share {min_share}: expected a value in (0, 1]."
            )
        self.min_share = min_share

    def reduce(self, text: str, candidates: tuple[str, ...]) -> tuple[str, ...]:
        scripts = dominant_scripts(text, self.min_share)
        if not scripts:
            return candidates
        kept = []
        for language in candidates:
            language_scripts = scripts_for_language(language)
            if language_scripts is None or scripts.intersection(language_scripts):
                kept.append(language)
        return tuple(kept)


class AllowListFilter:
    """Keep only a fixed set of languages."""

    name = "allow-list"

    def __init__(self, languages: Iterable[str]) -> None:
        self.languages = frozenset(languages)
        if not self.languages:
            raise LangRankConfigError("AllowListFilter needs at least one language code.")

    def reduce(self, text: str, candidates: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(language for language in candidates if language in self.languages)


_FILTER_FACTORIES: dict[str, Callable[[], CandidateFilter]] = {
    ScriptFilter.name: ScriptFilter,
}


def supported_filters() -> tuple[str, ...]:
    """Return filter names accepted by ``build_filter``."""
    return tuple(sorted(_FILTER_FACTORIES))


def build_filter(name: str) -> CandidateFilter:
    """Instantiate a named filter with default parameters.

    Raises:
        LangRankConfigError: If the name is unknown.
    """
    factory = _FILTER_FACTORIES.get(name)
    if factory is None:
        raise LangRankConfigError(
            f"Unknown filter '{name}'. Supported filters: {', '.join(supported_filters())}."
        )
    return factory()


def filter_name(candidate_filter: FilterLike) -> str:
    """Return a readable name for a filter or filter function."""
    name = getattr(candidate_filter, "name", None)
    if isinstance(name, str):
        return name
    return getattr(candidate_filter, "__name__", type(candidate_filter).__name__)


def apply_filter(
    candidate_filter: FilterLike,
    text: str,
    candidates: tuple[str, ...],
) -> tuple[str, ...]:
    """Run one filter, keeping only codes that were already candidates."""
    reduce = getattr(candidate_filter, "reduce", None)
    if callable(reduce):
        reduced = reduce(text, candidates)
    else:
        reduced = candidate_filter(text, candidates)  # type: ignore[operator]
    allowed = set(reduced)
    return tuple(language for language in candidates if language in allowed)
