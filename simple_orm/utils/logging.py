"""Logging helpers for simple_orm.

The package logger carries a ``NullHandler``; applications decide where
records go. ``configure_logging`` is a convenience for scripts.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

__all__ = ("LOGGER_NAME", "configure_logging", "get_logger")

LOGGER_NAME = "simple_orm"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace.

    Args:
        name: Dotted suffix such as ``"executor"``; a full module name that
            already starts with the package name is used as is.
    """

    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    fmt: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach one stderr stream handler to the package logger.

    Calling it again replaces the handler it installed before instead of
    adding a second one.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_simple_orm_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._simple_orm_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
