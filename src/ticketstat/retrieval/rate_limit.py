"""Parsing of the API's advisory rate-limit header into request spacing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class RateLimitInfo:
    """Advertised quota: at most `request_limit` requests per `window_seconds`."""

    window_seconds: Optional[Number] = None
    request_limit: Optional[Number] = None


def _coerce(value: str) -> Union[Number, str]:
    text = value.strip()
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            continue
    return text


def parse_rate_limit_header(raw: Optional[str]) -> Dict[str, Any]:
    """Turn `{period=>60, limit=>100}` into `{"period": 60, "limit": 100}`.

    Pieces without a `=>` separator are skipped. An absent header, or one in
    which nothing can be recognized, gives an empty dict.
    """
    if not raw:
        return {}
    cleaned = raw.replace("{", "").replace("}", "").replace(":", "")
    parsed: Dict[str, Any] = {}
    for piece in cleaned.split(", "):
        if "=>" not in piece:
            continue
        key, value = piece.split("=>", 1)
        key = key.strip()
        if key:
            parsed[key] = _coerce(value)
    if not parsed:
        print(f"[warn] unrecognized rate-limit header: {raw[:100]!r}")
    return parsed


def _number_or_none(value: Any) -> Optional[Number]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def parse_advisory(raw: Optional[str]) -> RateLimitInfo:
    """Build a RateLimitInfo from the raw header; missing fields stay None."""
    fields = parse_rate_limit_header(raw)
    return RateLimitInfo(
        window_seconds=_number_or_none(fields.get("period")),
        request_limit=_number_or_none(fields.get("limit")),
    )


def compute_delay_ms(info: RateLimitInfo) -> float:
    """Minimum spacing between requests in milliseconds; 0 without an advisory."""
    if info.window_seconds is None or not info.request_limit or info.request_limit <= 0:
        return 0.0
    return max(0.0, (info.window_seconds * 1000) / info.request_limit)


__all__ = [
    "RateLimitInfo",
    "parse_rate_limit_header",
    "parse_advisory",
    "compute_delay_ms",
]
