"""Collect every time entry of a project, pacing and retrying around rate limits."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

from ..models import TimeEntry
from .config import FIRST_PAGE, THROTTLE_FALLBACK_WAIT_SEC
from .http_client import Failure, Success, Throttled, fetch_page
from .rate_limit import compute_delay_ms


def report_progress(page_number: int) -> None:
    print(f"Downloaded data chunk #{page_number} from 10K.")


def now_ms() -> int:
    return int(time.time() * 1000)


def sleep_ms(duration_ms: float) -> None:
    """Block for `duration_ms`; non-positive durations return immediately."""
    if duration_ms <= 0:
        return
    time.sleep(duration_ms / 1000.0)


def wait_for_reset(reset_at_ms: Optional[int]) -> None:
    """Sleep until the server-declared reset instant of a 429 response."""
    if reset_at_ms is None:
        wait_ms = THROTTLE_FALLBACK_WAIT_SEC * 1000
        print(f"[rate-limit] 429 without reset time; sleeping {THROTTLE_FALLBACK_WAIT_SEC}s")
    else:
        wait_ms = max(0, reset_at_ms - now_ms())
        print(f"[rate-limit] 429 received; sleeping {wait_ms / 1000.0:.1f}s until reset")
    sleep_ms(wait_ms)
    print("  done sleeping, resuming download...")


def collect_time_entries(
    project_id: str,
    api_key: str,
    base_url: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    *,
    on_page: Callable[[int], None] = report_progress,
) -> List[TimeEntry]:
    """Fetch pages in order until the last one and return all their entries.

    A throttled page is retried after waiting for the reset instant; the
    buffer only grows on success, so a retry never duplicates entries. Any
    other failure is raised and nothing collected so far is returned. There is
    no retry limit.
    """
    entries: List[TimeEntry] = []
    page = FIRST_PAGE
    while True:
        result = fetch_page(project_id, api_key, base_url, start_date, end_date, page)

        if isinstance(result, Throttled):
            wait_for_reset(result.reset_at_ms)
            continue

        if isinstance(result, Failure):
            raise result.cause

        if not isinstance(result, Success):
            raise TypeError(f"unexpected page result: {result!r}")

        entries.extend(result.page.entries)
        on_page(result.page.number)
        if result.page.is_last:
            return entries

        sleep_ms(compute_delay_ms(result.rate_limit))
        page = result.page.next_token


__all__ = [
    "report_progress",
    "now_ms",
    "sleep_ms",
    "wait_for_reset",
    "collect_time_entries",
]
