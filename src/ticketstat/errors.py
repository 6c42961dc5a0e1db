"""Error types raised by the download and report steps."""

from __future__ import annotations

from typing import Optional


class TicketstatError(Exception):
    """Base class for failures that abort a run."""


class TransportError(TicketstatError):
    """The request never produced an HTTP response."""


class HttpError(TicketstatError):
    """The API answered with a non-2xx status other than 429."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseFormatError(TicketstatError):
    """A 2xx response whose body does not look like a time entry page."""


class OutputWriteError(TicketstatError):
    """The CSV report could not be created or written."""


__all__ = [
    "TicketstatError",
    "TransportError",
    "HttpError",
    "ResponseFormatError",
    "OutputWriteError",
]
