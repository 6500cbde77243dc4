"""Public SDK surface for LangRank.

This module provides a stable import path for library users.
It re-exports the detector, profile store, composition helpers and typed models.
"""

from __future__ import annotations

from core.errors import (
    LangRankConfigError,
    LangRankError,
    LangRankLoadError,
    LangRankTrainingError,
    ProfileFormatError,
)
from core.settings_file import SettingsFile, load_detector_settings
from core.types import DetectionResult, DetectorSettings, LanguageScore
from detection.detector import Detector
from extensions.filters import AllowListFilter, ScriptFilter, build_filter, supported_filters
from extensions.registry import ExtensionRegistry, FilteredDetector, compose
from ngrams.extractor import extract_vector
from ngrams.frequency_vector import FrequencyVector
from profiles.language_profile import LanguageProfile
from profiles.profile_io import read_profiles, write_profiles
from profiles.profile_store import ProfileStore
from profiles.training import ProfileTrainer, train_profile, train_profiles

__all__ = [
    "AllowListFilter",
    "DetectionResult",
    "Detector",
    "DetectorSettings",
    "ExtensionRegistry",
    "FilteredDetector",
    "FrequencyVector",
    "LangRankConfigError",
    "LangRankError",
    "LangRankLoadError",
    "LangRankTrainingError",
    "LanguageProfile",
    "LanguageScore",
    "ProfileFormatError",
    "ProfileStore",
    "ProfileTrainer",
    "ScriptFilter",
    "SettingsFile",
    "build_filter",
    "compose",
    "extract_vector",
    "load_detector_settings",
    "read_profiles",
    "supported_filters",
    "train_profile",
    "train_profiles",
    "write_profiles",
]
