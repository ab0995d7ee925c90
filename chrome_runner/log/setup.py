import sys
import logging
from typing import Optional
from logging.handlers import RotatingFileHandler

from chrome_runner.config import effective_settings as config

VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(level_name: Optional[str] = None) -> int:
    """
    Resolves a level name (defaulting to the LOG_LEVEL setting) to a logging constant.
    Unknown names fall back to INFO.

    :param level_name: Level name such as "DEBUG" or "warning".
    :return: The matching `logging` level constant.
    """
    name = (level_name or config.LOG_LEVEL or "INFO").upper()
    if name not in VALID_LEVELS:
        logging.getLogger(__name__).warning(
            f"Invalid LOG_LEVEL '{name}'. Valid values: {', '.join(VALID_LEVELS)}. Using INFO."
        )
        return logging.INFO
    return VALID_LEVELS[name]


def setup_logging(console_level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for the application.
    This sets up a console handler and, when configured, a rotating file handler,
    clearing any previously configured handlers to prevent duplication.

    :param console_level: The logging level for the console output. Defaults to the LOG_LEVEL setting.
    :param log_file: Path of an optional log file. Defaults to the LOG_FILE setting.
    """
    if console_level is None:
        console_level = get_log_level()
    log_file = log_file if log_file is not None else config.LOG_FILE

    root_logger = logging.getLogger()
    # Set root level to lowest to capture all messages for handler filtering
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers to prevent re-adding them on re-runs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    formatter = logging.Formatter(config.LOG_FORMAT)

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # --- File Handler (conditional) ---
    if log_file:
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=config.LOG_FILE_MAX_BYTES,
                backupCount=config.LOG_FILE_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.error(f"Failed to initialize file logging handler for '{log_file}': {e}")
