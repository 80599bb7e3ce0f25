"""
Logging utilities for the PoseNet decoder
"""

import logging
import os
import sys

import coloredlogs

from ..core.config import LoggingConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(config: LoggingConfig) -> logging.Logger:
    """
    Set up and configure the package logger

    Args:
        config: LoggingConfig with settings
            - level: Logging level (debug, info, warning, error, critical)
            - log_file: Optional path to log file

    Returns:
        Configured 'posenet' logger
    """
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    logger = logging.getLogger('posenet')
    logger.setLevel(log_level)
    logger.handlers = []  # Clear existing handlers

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(config.log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    coloredlogs.install(level=log_level, logger=logger, fmt=LOG_FORMAT)

    logger.debug(f"Logger initialized with level {config.level.upper()}")
    if config.log_file:
        logger.info(f"Logging to file: {config.log_file}")

    return logger
