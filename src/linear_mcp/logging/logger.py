"""Logging configuration. Outputs to stderr; stdout carries the stdio MCP transport."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(funcName)s(): %(message)s"


def setup_logger(name: str = "linear_mcp", level: str = "INFO") -> logging.Logger:
    """Attach a stderr handler to the package logger and apply ``level``.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    return logger
