"""Entry points for downloading time entries and writing the ticket report."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from ..analysis.tickets import aggregate_ticket_hours
from ..errors import TicketstatError
from ..retrieval.collectors import collect_time_entries
from .config import RunSettings, parse_args, resolve_settings
from .report import resolve_output_path, save_statistics_csv


def run(settings: RunSettings) -> Path:
    """Download every entry, aggregate by ticket, and save the CSV; returns its path."""
    print(f"Fetching time entries for project {settings.project_id}...")
    entries = collect_time_entries(
        settings.project_id,
        settings.api_key,
        settings.api_url,
        settings.start_iso_date,
        settings.end_iso_date,
    )
    print("Download complete.")

    stats = aggregate_ticket_hours(entries, settings.ticket_pattern)
    print(f"  {len(entries)} entries, {len(stats)} tickets")

    output_path = resolve_output_path(settings.output_path)
    save_statistics_csv(stats, output_path)
    print(f"Done. Analysis saved to: {output_path}")
    return output_path


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; exits 1 when the download or the write fails."""
    args = parse_args(argv)
    if args is None:
        return
    settings = resolve_settings(args)
    try:
        run(settings)
    except TicketstatError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
