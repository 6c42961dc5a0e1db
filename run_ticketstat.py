"""Convenience shim to run the ticket statistics workflow from a checkout."""

from __future__ import annotations

import sys

from ticketstat.pipeline.runner import main


if __name__ == "__main__":
    main(sys.argv[1:])
