"""Logging helpers.

Matchers log through ordinary module loggers. Per-call tracing is noisy, so
it goes to a dedicated TRACE level below DEBUG; summaries go to DEBUG.
"""

from __future__ import annotations

import logging

TRACE = 5

logging.addLevelName(TRACE, "TRACE")


def trace(logger: logging.Logger, msg: str, *args: object) -> None:
    """Emit a TRACE record if the logger would keep it."""
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args, stacklevel=2)
