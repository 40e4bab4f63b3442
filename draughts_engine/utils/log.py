"""
Logging setup for applications and tools embedding the engine.

Library modules only create loggers (logging.getLogger(__name__)); handlers
are attached here, by the application.
"""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "draughts_engine"
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def setup_logger(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: File name under ~/.draughts_engine/ to log to; logs to
            stderr when None

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    if log_file is not None:
        log_dir = Path.home() / ".draughts_engine"
        log_dir.mkdir(exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_dir / log_file, mode='w')
    else:
        handler = logging.StreamHandler()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
