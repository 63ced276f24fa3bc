"""Logging configuration for the collector."""

import logging

from .correlation import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

# Libraries whose INFO/DEBUG output drowns the collector's own lines
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for an invocation.

    The Lambda runtime installs its own handler on the root logger before
    our code runs; that handler is reused and reformatted rather than
    replaced. Every root handler gets the correlation ID filter so records
    from any logger can use the ``correlation_id`` field. Safe to call on
    every invocation of a warm container.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT)

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters):
            handler.addFilter(CorrelationIdFilter())

    root_logger.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
