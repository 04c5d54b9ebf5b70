"""Logging utilities for clipboarder modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a package logger that defers to the root logger configuration.

    The logger propagates to the root logger, so ``logging.basicConfig()``
    is enough to see its output. When the root logger has no handlers yet
    the level falls back to WARNING to keep library output quiet.

    Args:
        name: Logger name, e.g. ``clipboarder.upload``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger
