"""LangRank exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Broken setups raise; ambiguous or insufficient input never does.
"""

from __future__ import annotations


class LangRankError(Exception):
    """Base exception for all LangRank failures."""


class LangRankConfigError(LangRankError):
    """Raised for invalid detector, extractor, or store configuration."""


class LangRankLoadError(LangRankError):
    """Raised when a profile source cannot be read or parsed."""


class ProfileFormatError(LangRankLoadError, LangRankConfigError):
    """Raised when a profile record violates the profile invariants."""


class LangRankTrainingError(LangRankError):
    """Raised for offline profile training failures."""


class LangRankDependencyError(LangRankError):
    """Raised when an optional runtime dependency is missing."""
