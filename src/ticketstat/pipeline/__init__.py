"""Ticket statistics pipeline: CLI settings, orchestration, and CSV output."""

from .runner import main, run

__all__ = ["main", "run"]
