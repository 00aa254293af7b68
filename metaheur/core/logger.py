"""
Logging setup for the search framework.
Provides centralized logging with console and optional file handlers.
"""

import logging
import os
from datetime import datetime
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, log_file: Optional[str] = None,
                 level: int = logging.INFO, log_dir: Optional[str] = None,
                 to_file: bool = False) -> logging.Logger:
    """
    Setup logger with console and (optionally) file handlers.

    Args:
        name: Logger name (usually the package name, so module loggers inherit it)
        log_file: Optional log file path. Implies file logging.
        level: Logging level (default: INFO)
        log_dir: Directory for auto-named log files (default: "logs")
        to_file: Write a timestamped log file even if log_file is None

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger('metaheur', to_file=True)
        >>> logger.info("Starting search...")
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is None and not to_file:
        return logger

    log_dir = log_dir or "logs"
    if log_file is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = os.path.join(log_dir, f'search_{timestamp}.log')
    elif os.path.dirname(log_file):
        log_dir = os.path.dirname(log_file)
    else:
        log_file = os.path.join(log_dir, log_file)
    os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.info(f"Logger initialized. Log file: {log_file}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get existing logger, or create one with console-only defaults when
    neither it nor an ancestor has handlers.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.hasHandlers():
        return setup_logger(name)

    return logger
