"""Aggregation of downloaded time entries."""

from .tickets import DEFAULT_TICKET_PATTERN, aggregate_ticket_hours

__all__ = ["DEFAULT_TICKET_PATTERN", "aggregate_ticket_hours"]
