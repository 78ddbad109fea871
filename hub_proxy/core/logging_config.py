"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> None:
    """Configure the root logger once for the running process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
