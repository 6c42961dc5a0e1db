"""Summarize 10,000ft time entries by ticket identifier."""

__version__ = "1.0.0"

__all__ = ["__version__"]
