"""Sum time entry hours per ticket identifier found in the entry notes."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Dict, Iterable, List, Pattern, Union

from ..models import TicketStat, TimeEntry

DEFAULT_TICKET_PATTERN = r"[A-Z]+-\d+"


def find_tickets(notes: str, pattern: Pattern[str]) -> List[str]:
    """Every non-overlapping match in `notes`, duplicates included."""
    return [match.group(0) for match in pattern.finditer(notes or "")]


def aggregate_ticket_hours(
    entries: Iterable[TimeEntry],
    ticket_pattern: Union[str, Pattern[str]] = DEFAULT_TICKET_PATTERN,
) -> List[TicketStat]:
    """Return one TicketStat per ticket, in order of first appearance.

    Each match adds the entry's full hours, so a ticket mentioned twice in the
    same note is counted twice ("ABC-1 ABC-1" at 1h gives ABC-1 = 2h).
    """
    regex = re.compile(ticket_pattern) if isinstance(ticket_pattern, str) else ticket_pattern
    totals: Dict[str, Decimal] = {}
    for entry in entries:
        for ticket in find_tickets(entry.notes, regex):
            totals[ticket] = totals.get(ticket, Decimal(0)) + entry.hours
    return [TicketStat(ticket=ticket, hours=hours) for ticket, hours in totals.items()]


__all__ = ["DEFAULT_TICKET_PATTERN", "find_tickets", "aggregate_ticket_hours"]
