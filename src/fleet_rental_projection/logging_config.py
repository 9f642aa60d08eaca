"""
Logging setup for the command-line drivers.

Library modules only create module-level loggers; handlers are attached here.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Attach a stream handler (and optionally a file handler) to the package logger.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
        log_file: If given, messages are also written to this file.
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger("fleet_rental_projection")
    root.setLevel(level.upper())

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _LOGGING_CONFIGURED = True
