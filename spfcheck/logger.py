"""
Logging configuration for the SPF advisory service.

Console logging only; the service keeps no files or other persisted state.
"""

import logging


def setup_logger(name: str = "spfcheck", log_level: str = "INFO") -> logging.Logger:
    """
    Set up the package logger with a console handler.

    Args:
        name: Logger name; child loggers created with ``logging.getLogger(__name__)``
            inside the package inherit its handler.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger
