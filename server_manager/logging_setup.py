"""Centralized logging setup for the Server Manager.

Configures the root logger to write to stdout only; the process supervisor
(systemd, Docker) captures the stream.
"""
import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger with a single console handler.

    Calling this more than once only adjusts the level.

    Args:
        level: Log level name (e.g. "DEBUG", "INFO")

    Returns:
        The root logger
    """
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        root_logger.addHandler(console)

    # Keep uvicorn visible but quiet
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger
