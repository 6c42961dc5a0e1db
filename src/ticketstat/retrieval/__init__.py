"""Paginated, rate-limit aware retrieval of project time entries."""

from .collectors import collect_time_entries
from .http_client import fetch_page

__all__ = ["collect_time_entries", "fetch_page"]
