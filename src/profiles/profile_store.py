"""Read-only registry of language profiles.

A store is built once, typically at application startup, and never
mutated afterwards. Detectors borrow it, so concurrent reads need no lock.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

from core.errors import LangRankConfigError, LangRankLoadError
from core.logging_config import get_logger
from profiles.language_profile import LanguageProfile
from profiles.profile_io import ProfileSource, read_profiles, write_profiles

_LOGGER = get_logger(__name__)


class ProfileStore:
    """Immutable mapping from language code to profile.

    Iteration order is sorted by language code, so it is stable for a
    given store instance and across stores with the same languages.
    """

    def __init__(self, profiles: Iterable[LanguageProfile] = ()) -> None:
        by_language: dict[str, LanguageProfile] = {}
        for profile in profiles:
            if profile.language_code in by_language:
                raise LangRankConfigError(
                    f"Duplicate profile for language '{profile.language_code}'. "
                    "Each language code may appear only once per store."
                )
            by_language[profile.language_code] = profile
        ordered = {code: by_language[code] for code in sorted(by_language)}
        self._profiles = MappingProxyType(ordered)

    @classmethod
    def load(cls, source: ProfileSource) -> "ProfileStore":
        """Load a store from a profile file, directory, or text stream.

        Loading is all-or-nothing: any failure leaves no usable store.

        Args:
            source: Path to a JSON Lines file or directory, or a text stream.

        Returns:
            Fully validated store.

        Raises:
            LangRankLoadError: If the source is unreadable, corrupt, or lists
                a language twice.
            ProfileFormatError: If a profile violates its invariants.
        """
        profiles = read_profiles(source)
        try:
            store = cls(profiles)
        except LangRankConfigError as error:
            raise LangRankLoadError(f"Failed to load profiles from {source}: {error}") from error
        _LOGGER.info(
            "profile_store_loaded",
            source=str(source),
            languages=list(store.languages),
            profile_count=len(store),
        )
        return store

    @classmethod
    def merge(cls, *stores: "ProfileStore") -> "ProfileStore":
        """Combine several stores into one logical store.

        Raises:
            LangRankConfigError: If two stores provide the same language.
        """
        return cls(profile for store in stores for profile in store.all_profiles())

    def save(self, destination: str | Path) -> None:
        """Write every profile to a JSON Lines file."""
        write_profiles(self.all_profiles(), destination)

    def get(self, language_code: str) -> LanguageProfile | None:
        """Return the profile of a language, or None when absent."""
        return self._profiles.get(language_code)

    def all_profiles(self) -> tuple[LanguageProfile, ...]:
        return tuple(self._profiles.values())

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    def is_empty(self) -> bool:
        return not self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, language_code: object) -> bool:
        return language_code in self._profiles

    def __iter__(self) -> Iterator[LanguageProfile]:
        return iter(self._profiles.values())

    def __repr__(self) -> str:
        return f"ProfileStore(languages={list(self._profiles)})"
