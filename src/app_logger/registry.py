"""
Module: registry.py
Description: Optional process-wide default logger.

Components should receive their Logger explicitly. For call sites where
that is impractical, a default logger can be installed once at startup
and fetched anywhere:

    >>> init_default_logger(Logger(sys.stdout, level="info"))
    >>> default_logger().info("Worker started", {"queue": "orders"})
"""

import threading
from typing import Any, Optional

from app_logger.logger import Logger

_default: Optional[Logger] = None
_lock = threading.Lock()


def init_default_logger(logger: Optional[Logger] = None, *, replace: bool = False, **options: Any) -> Logger:
    """
    Install the process-wide default logger.

    Args:
        logger: Logger to install; built from options when omitted
        replace: Allow replacing an already installed logger
        **options: Logger constructor options

    Returns:
        The installed logger

    Raises:
        RuntimeError: If a default logger is installed and replace is False
    """
    global _default

    with _lock:
        if _default is not None and not replace:
            raise RuntimeError("default logger is already initialized")
        if logger is None:
            logger = Logger(**options)
        elif options:
            raise ValueError("pass either a logger or Logger options, not both")
        _default = logger
        return logger


def default_logger() -> Logger:
    """
    Return the process-wide default logger.

    Raises:
        RuntimeError: If init_default_logger() has not been called
    """
    logger = _default
    if logger is None:
        raise RuntimeError("default logger is not initialized; call init_default_logger() first")
    return logger


def has_default_logger() -> bool:
    return _default is not None


def close_default_logger() -> None:
    """Close and uninstall the default logger, if any."""
    global _default

    with _lock:
        logger, _default = _default, None
    if logger is not None:
        logger.close()
