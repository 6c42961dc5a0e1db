"""HTTP helpers for fetching single pages of project time entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from urllib.parse import parse_qs, urlparse

import requests

from ..errors import HttpError, ResponseFormatError, TicketstatError, TransportError
from ..models import Page, TimeEntry
from .config import (
    AUTH_HEADER,
    FIRST_PAGE,
    PER_PAGE,
    RATE_LIMIT_DATA_HEADER,
    RATE_LIMIT_RESET_HEADER,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from .rate_limit import RateLimitInfo, parse_advisory

SESSION = requests.Session()
SESSION.headers.update(
    {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
)

# reset values below this are Unix seconds rather than milliseconds
_SECONDS_CUTOFF = 10 ** 11


@dataclass(frozen=True)
class Success:
    page: Page
    rate_limit: RateLimitInfo


@dataclass(frozen=True)
class Throttled:
    reset_at_ms: Optional[int]


@dataclass(frozen=True)
class Failure:
    cause: TicketstatError


PageResult = Union[Success, Throttled, Failure]


def iso_to_api_date(iso_date: str) -> str:
    """Render an ISO-8601 timestamp as the API's `YYYY-M-D` date string.

    The month is zero-based (January is `0`) and nothing is zero padded, so
    `2024-01-15T00:00:00Z` becomes `2024-0-15`. Date-only input is taken as
    UTC midnight, naive date-times as local time.
    """
    text = iso_date.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None and "T" not in text and " " not in text:
        parsed = parsed.replace(tzinfo=timezone.utc)
    utc = parsed.astimezone(timezone.utc)
    return f"{utc.year}-{utc.month - 1}-{utc.day}"


def time_entries_url(base_url: str, project_id: str) -> str:
    sep = "" if base_url.endswith("/") else "/"
    return f"{base_url}{sep}projects/{project_id}/time_entries"


def next_page_token(next_url: Optional[str]) -> Optional[str]:
    """Return the `page` query parameter of a `paging.next` link."""
    if not next_url:
        return None
    values = parse_qs(urlparse(str(next_url)).query).get("page")
    if not values:
        raise ResponseFormatError(f"next page link has no page parameter: {next_url}")
    return values[0]


def parse_reset_ms(value: Any) -> Optional[int]:
    """Normalize a reset header to Unix milliseconds; None when unusable."""
    try:
        reset = int(float(str(value).strip()))
    except (TypeError, ValueError):
        return None
    if reset < _SECONDS_CUTOFF:
        reset *= 1000
    return reset


def log_http_error(resp: requests.Response, url: str) -> str:
    """Print a short, human-readable message when the API returns an error."""
    try:
        body = resp.json()
    except Exception:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    msg = body.get("message") or body.get("error") or body.get("text") or ""
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {msg}")
    return msg


def _page_number(value: Any, fallback: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(fallback) if str(fallback).isdigit() else 0


def parse_page(body: Any, requested_page: str) -> Page:
    """Build a Page from a decoded `{paging, data}` response body."""
    if not isinstance(body, dict):
        raise ResponseFormatError("response body is not a JSON object")
    paging = body.get("paging")
    records = body.get("data")
    if not isinstance(paging, dict) or not isinstance(records, list):
        raise ResponseFormatError("response body lacks paging or data")
    try:
        entries = [TimeEntry.from_api(record) for record in records]
    except (AttributeError, ValueError) as exc:
        raise ResponseFormatError(f"malformed time entry: {exc}") from exc
    return Page(
        number=_page_number(paging.get("page"), requested_page),
        entries=entries,
        next_token=next_page_token(paging.get("next")),
    )


def build_params(
    start_date: Optional[str], end_date: Optional[str], page: str
) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if start_date:
        params["from"] = iso_to_api_date(start_date)
    if end_date:
        params["to"] = iso_to_api_date(end_date)
    params["page"] = page
    params["per_page"] = PER_PAGE
    return params


def fetch_page(
    project_id: str,
    api_key: str,
    base_url: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    page: str = FIRST_PAGE,
) -> PageResult:
    """GET one page of time entries; never retries on its own."""
    url = time_entries_url(base_url, project_id)
    try:
        resp = SESSION.get(
            url,
            headers={AUTH_HEADER: api_key},
            params=build_params(start_date, end_date, page),
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        return Failure(TransportError(f"request for page {page} failed: {exc}"))

    if resp.status_code == 429:
        headers = resp.headers or {}
        return Throttled(reset_at_ms=parse_reset_ms(headers.get(RATE_LIMIT_RESET_HEADER)))

    if not 200 <= resp.status_code < 300:
        msg = log_http_error(resp, url)
        detail = f": {msg}" if msg else ""
        return Failure(HttpError(f"HTTP {resp.status_code} for {url}{detail}", resp.status_code))

    try:
        body = resp.json()
    except ValueError as exc:
        return Failure(ResponseFormatError(f"invalid JSON for page {page}: {exc}"))
    try:
        parsed = parse_page(body, page)
    except ResponseFormatError as exc:
        return Failure(exc)

    headers = resp.headers or {}
    return Success(page=parsed, rate_limit=parse_advisory(headers.get(RATE_LIMIT_DATA_HEADER)))


__all__ = [
    "SESSION",
    "Success",
    "Throttled",
    "Failure",
    "PageResult",
    "iso_to_api_date",
    "time_entries_url",
    "next_page_token",
    "parse_reset_ms",
    "log_http_error",
    "parse_page",
    "build_params",
    "fetch_page",
]
