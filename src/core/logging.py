"""Loguru sinks: short lines on the console, full detail in the optional log file."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# the console is shared with the board and the move prompt, keep it to level and message
CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Replace loguru's default handler with a console sink and, if a path is given, a rotating file sink."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation="10 MB", retention=3)

    logger.debug(f"Logging at {level}, log file: {log_file}")
