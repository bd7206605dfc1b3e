"""
Logging Configuration
Sets up the global logger for the package.
"""
import logging
import sys
from typing import Optional

from loomishead.config import get_log_level


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for the 'loomishead' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO). Defaults to
            the level named by the LOOMISHEAD_LOG_LEVEL environment variable.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = get_log_level()

    logger = logging.getLogger("loomishead")
    logger.setLevel(level)

    # Re-running setup must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
