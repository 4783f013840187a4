"""Configuration for the phylotree package."""

import logging
import os
from typing import Optional, Union


class Config:
    """Package-wide settings, overridable through the environment."""

    # Logging
    LOG_LEVEL = os.environ.get("PHYLOTREE_LOG_LEVEL", "WARNING")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Rerooting
    NEW_ROOT_NAME = os.environ.get("PHYLOTREE_NEW_ROOT_NAME", "NewRoot")

    # Absolute slack allowed when comparing a requested branch length
    # against the length of the edge it has to fit on.
    LENGTH_TOLERANCE = float(os.environ.get("PHYLOTREE_LENGTH_TOLERANCE", "1e-12"))


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Logging level; defaults to ``Config.LOG_LEVEL``.

    Returns:
        The configured ``phylotree`` logger.
    """
    logger = logging.getLogger("phylotree")
    if level is None:
        level = Config.LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    # Only add a StreamHandler once, repeated calls just change the level
    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
        for h in logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Config.LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
