"""Command-line options."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

VERSION = "0.1.0"
PROG = "dev-dashboard"


def _refresh_interval(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid refresh interval: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"refresh interval must not be negative: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG, description="Terminal dashboard for development status"
    )
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        default=Path("."),
        help="Path to git repository (defaults to current directory)",
    )
    parser.add_argument(
        "-i",
        "--refresh",
        type=_refresh_interval,
        default=5,
        help="Refresh interval in seconds",
    )
    parser.add_argument(
        "-o",
        "--owner",
        help="GitHub repository owner (auto-detected from git remote if not specified)",
    )
    parser.add_argument(
        "-n",
        "--repo",
        help="GitHub repository name (auto-detected from git remote if not specified)",
    )
    parser.add_argument(
        "--token",
        help="GitHub token (defaults to `gh auth token` output or GITHUB_TOKEN env var)",
    )
    parser.add_argument(
        "-w",
        "--web",
        action="store_true",
        help="Run in web mode (starts API server instead of TUI)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)