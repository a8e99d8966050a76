"""Logging helpers for relstore."""

import logging
from typing import Optional

from relstore.config import get_log_level

ROOT_LOGGER = "relstore"


def configure_logging(level: Optional[int | str] = None) -> None:
    """Attach the relstore handler once; later calls only adjust the level."""
    logger = logging.getLogger(ROOT_LOGGER)
    if level is None:
        level = get_log_level()
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the ``relstore.<name>`` logger."""
    if not logging.getLogger(ROOT_LOGGER).handlers:
        configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
