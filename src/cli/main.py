"""LangRank CLI entry points.
This module exposes detection, training and profile inspection commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.detect_command import add_detect_command, resolve_profiles_source, run_detect_command
from cli.train_command import add_train_command, run_train_command
from core.config import LangRankConfig
from core.errors import LangRankError
from profiles.profile_store import ProfileStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="langrank", description="LangRank language detection CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_detect_command(subparsers)
    add_train_command(subparsers)
    _add_profiles_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the LangRank CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = LangRankConfig.from_env()
        if args.command == "detect":
            return run_detect_command(config, args)
        if args.command == "train":
            return run_train_command(args)
        if args.command == "profiles":
            return _run_profiles_command(config, args)
    except LangRankError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_profiles_command(config: LangRankConfig, args: argparse.Namespace) -> int:
    """Handle profiles command.

    Args:
        config: Environment-derived runtime config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    store = ProfileStore.load(resolve_profiles_source(config, args.profiles))
    for profile in store:
        print(
            f"{profile.language_code}\t"
            f"{','.join(str(size) for size in profile.ngram_sizes)}\t"
            f"{profile.cap}\t"
            f"{len(profile.vector)}"
        )
    return 0


def _add_profiles_command(subparsers: Any) -> None:
    """Register profiles subcommand."""
    parser = subparsers.add_parser("profiles", help="List languages of a profile source")
    parser.add_argument("--profiles", help="Profile file or directory (overrides LANGRANK_PROFILES)")
