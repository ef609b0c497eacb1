from __future__ import annotations

import logging
import sys

_PACKAGE_LOGGER = "todo_storage"


class _PackageHandler(logging.StreamHandler):
    """Console handler owned by this package (lets setup_logging stay idempotent)."""


# PUBLIC_INTERFACE
def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure console logging for the todo_storage package.

    Attaches a single stderr handler to the package logger and sets its level.
    Records still propagate to the root logger, so handlers installed by the
    hosting application (or pytest's caplog) keep seeing them.
    Safe to call more than once; later calls only adjust the level.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)

    for h in logger.handlers:
        if isinstance(h, _PackageHandler):
            h.setLevel(level)
            return logger

    handler = _PackageHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
