"""Command-line configuration for a ticket statistics run."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .. import __version__
from ..analysis.tickets import DEFAULT_TICKET_PATTERN
from ..retrieval.config import DEFAULT_API_URL
from ..retrieval.http_client import iso_to_api_date

PROG = "ticketstat"
REQUIRED_ARGS = ("project_id", "output_path", "api_key")


@dataclass(frozen=True)
class RunSettings:
    """Resolved runtime settings for one download and report."""

    project_id: str
    output_path: str
    api_key: str
    api_url: str
    start_iso_date: Optional[str]
    end_iso_date: Optional[str]
    ticket_pattern: str


def one_year_ago_iso(now: Optional[datetime] = None) -> str:
    """Same instant one calendar year back, as a UTC ISO string (Feb 29 rolls to Mar 1)."""
    now = now or datetime.now(timezone.utc)
    try:
        then = now.replace(year=now.year - 1)
    except ValueError:
        then = now.replace(year=now.year - 1, day=28) + timedelta(days=1)
    then = then.astimezone(timezone.utc)
    return then.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _iso_date(value: str) -> str:
    try:
        iso_to_api_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 date: {value!r}")
    return value


def _ticket_pattern(value: str) -> str:
    try:
        re.compile(value)
    except re.error as exc:
        raise argparse.ArgumentTypeError(f"invalid ticket pattern {value!r}: {exc}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the ticketstat entry point."""

    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Sum 10,000ft project hours per ticket found in time entry notes.",
    )
    parser.add_argument("project_id", nargs="?")
    parser.add_argument("output_path", nargs="?", help="CSV file or directory")
    parser.add_argument("api_key", nargs="?")
    parser.add_argument("--api-url", default=DEFAULT_API_URL)
    parser.add_argument(
        "--start-iso-date", type=_iso_date, default=None, help="default: one year ago"
    )
    parser.add_argument("--end-iso-date", type=_iso_date, default=None)
    parser.add_argument("--ticket-pattern", type=_ticket_pattern, default=DEFAULT_TICKET_PATTERN)
    parser.add_argument("-v", "--version", action="version", version=__version__)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> Optional[argparse.Namespace]:
    """Parse argv; returns None after printing usage when the arguments don't fit."""

    parser = build_arg_parser()
    args, extras = parser.parse_known_args(argv)
    if extras or any(getattr(args, name) is None for name in REQUIRED_ARGS):
        print()
        parser.print_usage()
        print()
        return None
    return args


def resolve_settings(args: argparse.Namespace) -> RunSettings:
    """Return immutable settings, filling in the run-time date default."""

    return RunSettings(
        project_id=str(args.project_id),
        output_path=str(args.output_path),
        api_key=str(args.api_key),
        api_url=args.api_url or DEFAULT_API_URL,
        start_iso_date=args.start_iso_date or one_year_ago_iso(),
        end_iso_date=args.end_iso_date,
        ticket_pattern=args.ticket_pattern or DEFAULT_TICKET_PATTERN,
    )


__all__ = [
    "PROG",
    "REQUIRED_ARGS",
    "RunSettings",
    "one_year_ago_iso",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
