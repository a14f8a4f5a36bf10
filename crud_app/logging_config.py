"""
Logging configuration for the service.

configure_logging() is called from the application factory rather than at
import time, so importing any module of the package has no side effects on
the root logger. It returns the package logger, which the factory hands to
the components that log.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ContextFormatter(logging.Formatter):
    """
    Formatter that appends structured context passed through ``extra=``.

    Only the keys listed in ``context_keys`` are rendered, so arbitrary
    LogRecord attributes never leak into the output:

        logger.error("insert failed", extra={"handler": "create_book"})
        # ... - ERROR - insert failed [handler=create_book]
    """

    context_keys = ("handler", "problem", "method", "path")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in self.context_keys
            if hasattr(record, key)
        ]
        if context:
            message = f"{message} [{' '.join(context)}]"
        return message


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger and return the package logger.

    If the root logger already has handlers (pytest, uvicorn with a log
    config, repeated create_app() calls), only the level is adjusted.

    Args:
        level: Logging level name, case-insensitive

    Returns:
        The ``crud_app`` logger
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ContextFormatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(numeric_level)

    logger = logging.getLogger("crud_app")
    logger.setLevel(numeric_level)
    return logger
