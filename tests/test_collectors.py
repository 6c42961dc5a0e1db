"""Tests for ticketstat.retrieval.collectors covering pagination and 429 recovery.

Run with:
    pytest tests/test_collectors.py --maxfail=1 -v --cov=ticketstat.retrieval.collectors --cov-report=term-missing
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from ticketstat.errors import HttpError
from ticketstat.models import Page, TimeEntry
from ticketstat.retrieval import collectors
from ticketstat.retrieval.http_client import Failure, Success, Throttled
from ticketstat.retrieval.rate_limit import RateLimitInfo

ADVISORY = RateLimitInfo(window_seconds=60, request_limit=100)


def _entries(*notes):
    return [TimeEntry(hours=Decimal(1), notes=n) for n in notes]


def _success(number, next_token, entries):
    return Success(page=Page(number=number, entries=entries, next_token=next_token), rate_limit=ADVISORY)


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(collectors.time, "sleep", lambda value: calls.append(value))
    return calls


@patch("ticketstat.retrieval.collectors.fetch_page")
def test_collects_three_pages_in_order(mock_fetch, sleeps):
    p1, p2, p3 = _entries("a", "b"), _entries("c"), _entries("d")
    mock_fetch.side_effect = [_success(1, "2", p1), _success(2, "3", p2), _success(3, None, p3)]
    seen = []

    result = collectors.collect_time_entries("7", "key", "https://x/", on_page=seen.append)

    assert result == p1 + p2 + p3
    assert seen == [1, 2, 3]
    assert sleeps == [0.6, 0.6]
    assert [call.args[5] for call in mock_fetch.call_args_list] == ["1", "2", "3"]


@patch("ticketstat.retrieval.collectors.fetch_page")
def test_throttled_page_is_retried_without_duplicates(mock_fetch, sleeps, monkeypatch):
    monkeypatch.setattr(collectors, "now_ms", lambda: 1_000_000)
    p1, p2, p3 = _entries("a"), _entries("b"), _entries("c")
    mock_fetch.side_effect = [
        _success(1, "2", p1),
        Throttled(reset_at_ms=1_002_500),
        _success(2, "3", p2),
        _success(3, None, p3),
    ]

    result = collectors.collect_time_entries("7", "key", "https://x/", on_page=lambda n: None)

    assert result == p1 + p2 + p3
    assert [call.args[5] for call in mock_fetch.call_args_list] == ["1", "2", "2", "3"]
    assert sleeps == [0.6, 2.5, 0.6]


@patch("ticketstat.retrieval.collectors.fetch_page")
def test_reset_in_the_past_retries_immediately(mock_fetch, sleeps, monkeypatch):
    monkeypatch.setattr(collectors, "now_ms", lambda: 5_000)
    p1 = _entries("a")
    mock_fetch.side_effect = [Throttled(reset_at_ms=1_000), _success(1, None, p1)]
    assert collectors.collect_time_entries("7", "key", "https://x/", on_page=lambda n: None) == p1
    assert sleeps == []


@patch("ticketstat.retrieval.collectors.fetch_page")
def test_missing_reset_uses_fallback_wait(mock_fetch, sleeps, monkeypatch):
    monkeypatch.setattr(collectors, "THROTTLE_FALLBACK_WAIT_SEC", 7)
    mock_fetch.side_effect = [Throttled(reset_at_ms=None), _success(1, None, [])]
    assert collectors.collect_time_entries("7", "key", "https://x/", on_page=lambda n: None) == []
    assert sleeps == [7.0]


@patch("ticketstat.retrieval.collectors.fetch_page")
def test_failure_aborts_without_partial_result(mock_fetch, sleeps):
    mock_fetch.side_effect = [
        _success(1, "2", _entries("a")),
        Failure(HttpError("HTTP 500", 500)),
        _success(3, None, _entries("c")),
    ]
    with pytest.raises(HttpError):
        collectors.collect_time_entries("7", "key", "https://x/", on_page=lambda n: None)
    assert mock_fetch.call_count == 2


@patch("ticketstat.retrieval.collectors.fetch_page")
def test_progress_printed_by_default(mock_fetch, sleeps, capsys):
    mock_fetch.side_effect = [_success(1, None, [])]
    collectors.collect_time_entries("7", "key", "https://x/", "2024-01-01", "2024-02-01")
    assert "Downloaded data chunk #1" in capsys.readouterr().out
    assert mock_fetch.call_args.args[3:5] == ("2024-01-01", "2024-02-01")
