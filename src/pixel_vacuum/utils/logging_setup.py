"""
Logging setup for the game.

Configures the root logger from the `logging` section of the app config so
every module can simply use `logging.getLogger(__name__)`.
"""
import logging
import logging.handlers
import os

from pixel_vacuum.core.config import LoggingConfig


def setup_logging(config: LoggingConfig) -> None:
    """
    Configures the root logger with a console handler and a rotating file.

    The file rotates at 1MB and keeps 5 backups.
    """
    log_level = config.level.upper()

    log_dir = os.path.dirname(config.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(config.format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        config.log_file, maxBytes=1024 * 1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {config.log_file}")
