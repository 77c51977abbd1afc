"""Logging setup for the CLI process.

Diagnostic logging goes to stderr through the standard library; the
operator-facing status lines are rendered separately by the CLI layer.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_PACKAGE_LOGGER = "auth0_org_cli"


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Safe to call more than once; the handler is replaced, not stacked.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_auth0_org_cli", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._auth0_org_cli = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level_for_verbosity(verbosity))
    # httpx logs every request at INFO; only surface it when debugging.
    logging.getLogger("httpx").setLevel(
        logging.INFO if verbosity >= 2 else logging.WARNING,
    )
    return logger
