"""Shared logger for the polynomial client and server."""
import logging
import os
import sys

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger(name: str) -> logging.Logger:
    """
    Create the package logger with a single stderr handler.

    The level is read from the ``POLYNOMIAL_LOG_LEVEL`` environment variable and defaults to INFO.

    :param str name: Logger name

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(os.environ.get("POLYNOMIAL_LOG_LEVEL", "INFO").upper())
    return log


logger: logging.Logger = _build_logger("polynomial_client_server")
