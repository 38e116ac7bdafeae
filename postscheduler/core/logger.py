"""
Centralised Logging Module.

Every module logs through here instead of printing, so the HTTPS server
output stays uniform on stdout.
"""

import logging
import sys

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Returns a logger writing to stdout with the project format.

    Args:
        name (str): Name of the calling module (usually __name__).
        level (int): Minimum level emitted by the handler.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Loggers are cached by name; only the first call attaches a handler
    if not logger.handlers:
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        # Records are not passed on to parent loggers
        logger.propagate = False

    return logger
