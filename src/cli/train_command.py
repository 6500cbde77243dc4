"""Train command wiring for LangRank CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.settings_file import load_detector_settings
from core.types import DetectorSettings
from profiles.training import train_profiles


def add_train_command(subparsers: Any) -> None:
    """Register train subcommand."""
    parser = subparsers.add_parser(
        "train",
        help="Train language profiles from a corpus directory",
    )
    parser.add_argument(
        "corpus_dir",
        help="Directory with one subdirectory of UTF-8 .txt files per language",
    )
    parser.add_argument("--output", required=True, help="Output profile file (.jsonl or .jsonl.gz)")
    parser.add_argument("--settings", help="Optional YAML settings with ngram_sizes and cap")


def run_train_command(args: argparse.Namespace) -> int:
    """Train every language and write one profile file.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    settings = load_detector_settings(args.settings).settings if args.settings else DetectorSettings()
    store = train_profiles(args.corpus_dir, settings)
    store.save(args.output)
    print(f"output={args.output}")
    print(f"languages={','.join(store.languages)}")
    return 0
