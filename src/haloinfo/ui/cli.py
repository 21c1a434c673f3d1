# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from haloinfo.app import identify_feature, lookup_feature
from haloinfo.config import ConfigurationError, configure_logging
from haloinfo.domain.model import FeatureCategory

from .render import render_json

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile clicked map features with the aeronautical catalog"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("lookup", "Extract a tile feature and merge it with catalog detail"),
        ("extract", "Only extract the tile identity, without querying the catalog"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "feature",
            type=str,
            help="Path to a GeoJSON-like feature file, or '-' to read from stdin",
        )
        sub.add_argument(
            "--category",
            type=FeatureCategory,
            choices=list(FeatureCategory),
            help="Override the category derived from the feature's source layer",
        )

    return parser.parse_args(list(argv))


def _load_feature(source: str) -> object:
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Feature is not valid JSON: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        feature = _load_feature(parsed_args.feature)
    except (OSError, ValueError):
        log.exception("Could not read feature %s", parsed_args.feature)
        sys.exit(2)

    try:
        if parsed_args.command == "extract":
            print(render_json(identify_feature(feature, category=parsed_args.category)))
        elif parsed_args.command == "lookup":
            print(render_json(lookup_feature(feature, category=parsed_args.category)))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during lookup")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
