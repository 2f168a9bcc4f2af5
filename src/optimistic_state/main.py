#!/usr/bin/env python3

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from logging import getLogger
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import ValidationError

from optimistic_state.adapters.simulation import load_scenario
from optimistic_state.app import push_states, replay_scenario
from optimistic_state.common.logging import configure_logging
from optimistic_state.config import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from optimistic_state.adapters.simulation import Scenario

log = getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Apply optimistic states and reconcile them against confirmations"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every submission and batch reset",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser("replay", help="Replay a scripted scenario file")
    replay.add_argument("scenario", type=Path, help="Path to a scenario JSON file")
    replay.add_argument(
        "--initial-state",
        type=_parse_json,
        default=None,
        help="JSON value overriding the scenario's initial state",
    )

    push = subparsers.add_parser("push", help="Confirm states against the remote endpoint")
    push.add_argument("states", nargs="+", type=_parse_json, help="JSON states to submit")
    push.add_argument(
        "--initial-state",
        type=_parse_json,
        default=None,
        help="JSON value used as the last confirmed state",
    )

    return parser.parse_args(list(argv))


def _parse_json(value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"Invalid JSON value: {value}") from exc


def _load(path: Path) -> Scenario:
    try:
        return load_scenario(path)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Invalid scenario file {path}: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        scenario = _load(parsed_args.scenario) if parsed_args.command == "replay" else None
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if scenario is not None:
            asyncio.run(replay_scenario(scenario, initial_state=parsed_args.initial_state))
        else:
            asyncio.run(
                push_states(parsed_args.states, initial_state=parsed_args.initial_state)
            )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def cli() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    cli()
