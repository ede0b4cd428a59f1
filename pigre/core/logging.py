"""Logging setup for the console demo and embedding hosts."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", debug: bool = False) -> logging.Logger:
    """Attach a stream handler to the package logger (idempotent).

    debug forces DEBUG regardless of level.
    """
    logger = logging.getLogger("pigre")
    logger.setLevel(logging.DEBUG if debug else level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
