"""Logging setup."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT)
    root.setLevel(level)
    # passlib complains about newer bcrypt builds on first use.
    logging.getLogger("passlib").setLevel(logging.ERROR)


__all__ = ["configure_logging"]
