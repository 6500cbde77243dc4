"""Detect command wiring for LangRank CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterable

from core.config import LangRankConfig
from core.errors import LangRankConfigError
from core.settings_file import load_detector_settings
from core.types import DetectionResult
from detection.detector import Detector
from extensions.filters import FilterLike, build_filter, supported_filters
from extensions.registry import compose
from profiles.profile_store import ProfileStore

_JSON_TOP_SCORES = 5


def add_detect_command(subparsers: Any) -> None:
    """Register detect subcommand."""
    parser = subparsers.add_parser("detect", help="Detect the language of texts")
    parser.add_argument("text", nargs="*", help="Texts to classify; reads stdin lines when omitted")
    parser.add_argument("--profiles", help="Profile file or directory (overrides LANGRANK_PROFILES)")
    parser.add_argument("--settings", help="Optional YAML detector settings file")
    parser.add_argument(
        "--filter",
        action="append",
        default=[],
        choices=supported_filters(),
        help="Candidate filter applied before scoring; repeatable",
    )
    parser.add_argument(
        "--language",
        action="append",
        default=[],
        help="Restrict candidates to this language code; repeatable",
    )
    parser.add_argument("--workers", type=int, help="Worker threads for batch detection")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per result")


def run_detect_command(config: LangRankConfig, args: argparse.Namespace) -> int:
    """Load profiles, detect every input text and print one line per result.

    Args:
        config: Environment-derived runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    store = ProfileStore.load(resolve_profiles_source(config, args.profiles))
    filters: list[FilterLike] = []
    if args.settings:
        settings_file = load_detector_settings(args.settings)
        detector = Detector(store, settings_file.settings)
        filters.extend(build_filter(name) for name in settings_file.filters)
    else:
        detector = Detector.from_store(
            store,
            confidence_threshold=config.confidence_threshold,
            min_margin=config.min_margin,
        )
    filters.extend(build_filter(name) for name in args.filter)
    composed = compose(detector, filters)
    texts = args.text or _read_stdin_lines()
    for result in composed.detect_all(texts, max_workers=args.workers, languages=args.language):
        print(_render_result(result, args.json))
    return 0


def resolve_profiles_source(config: LangRankConfig, override: str | None) -> str:
    """Pick the profile source from the CLI flag or the environment.

    Raises:
        LangRankConfigError: If neither is set.
    """
    if override:
        return override
    if config.profiles_path is not None:
        return str(config.profiles_path)
    raise LangRankConfigError(
        "No profile source configured. Pass --profiles or set LANGRANK_PROFILES."
    )


def _read_stdin_lines() -> Iterable[str]:
    return (line.rstrip("\n") for line in sys.stdin)


def _render_result(result: DetectionResult, as_json: bool) -> str:
    if not as_json:
        return f"{result.language}\t{result.confidence:.4f}\t{str(result.confident).lower()}"
    payload = {
        "language": result.language,
        "confidence": round(result.confidence, 6),
        "margin": round(result.margin, 6),
        "confident": result.confident,
        "fallback_filter": result.fallback_filter,
        "scores": [
            {"language": score.language, "distance": round(score.distance, 4)}
            for score in result.scores[:_JSON_TOP_SCORES]
        ],
    }
    return json.dumps(payload, ensure_ascii=False)
