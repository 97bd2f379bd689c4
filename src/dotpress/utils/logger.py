"""Minimal logging utilities for dotpress.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications (and the CLI) do.

Example:
    >>> from dotpress.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Interpreting document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "dotpress." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'dotpress.mymodule'
    """
    if not (name == "dotpress" or name.startswith("dotpress.")):
        name = f"dotpress.{name}"
    return logging.getLogger(name)
