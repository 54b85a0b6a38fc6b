"""Logging setup shared by the CLI and the HTTP service."""

import logging
import sys
from typing import Optional

SERVICE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CLI_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Third-party loggers held at WARNING whatever the package level is
QUIET_LOGGERS: tuple[str, ...] = ("aiohttp.access", "aiohttp.client", "asyncio")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the ``articlepull`` logger.

    Records go to stderr so that extracted output written to stdout by the
    CLI stays clean; a file handler is added when *log_file* is given.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Record format (SERVICE_FORMAT if None)
        force: Replace existing handlers instead of keeping them

    Returns:
        The package logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or SERVICE_FORMAT)

    logger = logging.getLogger("articlepull")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    # Records stop here; uvicorn configures the root logger separately
    logger.propagate = False

    return logger
