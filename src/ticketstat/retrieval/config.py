"""Central configuration constants for the time entry retrieval workflow."""

from __future__ import annotations

import os

USER_AGENT = "ticketstat/1.0"
DEFAULT_API_URL = os.getenv("TICKETSTAT_API_URL", "https://api.10000ft.com/api/v1/")
PER_PAGE = 100
FIRST_PAGE = "1"
REQUEST_TIMEOUT = int(os.getenv("TICKETSTAT_REQUEST_TIMEOUT", "90"))
AUTH_HEADER = "auth"
RATE_LIMIT_DATA_HEADER = "x-ratelimit-data"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
# used when a 429 carries no usable reset header
THROTTLE_FALLBACK_WAIT_SEC = int(os.getenv("TICKETSTAT_THROTTLE_FALLBACK_WAIT_SEC", "60"))

__all__ = [
    "USER_AGENT",
    "DEFAULT_API_URL",
    "PER_PAGE",
    "FIRST_PAGE",
    "REQUEST_TIMEOUT",
    "AUTH_HEADER",
    "RATE_LIMIT_DATA_HEADER",
    "RATE_LIMIT_RESET_HEADER",
    "THROTTLE_FALLBACK_WAIT_SEC",
]
