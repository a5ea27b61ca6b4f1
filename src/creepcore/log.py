"""Logging setup for the creepcore logger tree.

Every module logs through logging.getLogger(__name__); this installs one
handler on the package root so hosts can call it once at startup.
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO, stream: object | None = None) -> logging.Logger:
    """Configure the creepcore logger.

    Safe to call more than once: the previous handler is replaced.

    Args:
        level: Logging level name or number.
        stream: Stream for the handler (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("creepcore")
    for handler in list(logger.handlers):
        if getattr(handler, "_creepcore", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)  # type: ignore[arg-type]
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._creepcore = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
