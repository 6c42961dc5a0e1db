"""Data models for time entries, pages, and ticket statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional


def to_hours(value: Any) -> Decimal:
    """Convert a JSON hours value to Decimal via its string form."""
    if value is None:
        return Decimal(0)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"invalid hours value: {value!r}") from None


@dataclass(frozen=True)
class TimeEntry:
    """One time entry from the API."""

    hours: Decimal
    notes: str = ""

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> "TimeEntry":
        return cls(hours=to_hours(record.get("hours")), notes=str(record.get("notes") or ""))


@dataclass(frozen=True)
class Page:
    """A batch of entries plus the token of the following page."""

    number: int
    entries: List[TimeEntry] = field(default_factory=list)
    next_token: Optional[str] = None  # None = last page

    @property
    def is_last(self) -> bool:
        return self.next_token is None


@dataclass
class TicketStat:
    """Accumulated hours for one ticket identifier."""

    ticket: str
    hours: Decimal


__all__ = ["to_hours", "TimeEntry", "Page", "TicketStat"]
