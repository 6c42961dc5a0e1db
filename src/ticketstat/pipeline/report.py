"""CSV output of ticket statistics."""

from __future__ import annotations

import csv
import os
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Union

from ..errors import OutputWriteError
from ..models import TicketStat

DEFAULT_FILE_NAME = "10kticketstat.csv"
CSV_HEADER = ("Ticket", "Hours")


def resolve_output_path(user_path: Union[str, Path]) -> Path:
    """Use DEFAULT_FILE_NAME inside `user_path` when it is an existing directory."""
    path = Path(user_path).expanduser()
    if path.is_dir():
        return path / DEFAULT_FILE_NAME
    return path


def format_hours(hours: Decimal) -> str:
    """Plain decimal text without trailing zeros or exponents (2.50 -> 2.5)."""
    normalized = hours.normalize()
    if normalized == normalized.to_integral_value():
        normalized = normalized.quantize(Decimal(1))
    return format(normalized, "f")


def save_statistics_csv(stats: Iterable[TicketStat], path: Union[str, Path]) -> None:
    """Write a `Ticket,Hours` CSV, one row per stat."""
    try:
        parent = os.path.dirname(os.fspath(path))
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for stat in stats:
                writer.writerow([stat.ticket, format_hours(stat.hours)])
    except OSError as exc:
        raise OutputWriteError(f"cannot write {path}: {exc}") from exc


__all__ = [
    "DEFAULT_FILE_NAME",
    "CSV_HEADER",
    "resolve_output_path",
    "format_hours",
    "save_statistics_csv",
]
