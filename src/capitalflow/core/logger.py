import logging
import logging.handlers
import os
from typing import Optional, Union

PACKAGE_LOGGER = "capitalflow"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger once; later calls only change the level.

    Module loggers (get_logger(__name__)) propagate here. With log_dir set,
    records also go to log_dir/capitalflow.log, rotated at midnight.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_filepath = os.path.join(log_dir, f"{PACKAGE_LOGGER}.log")
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_filepath, when="midnight", backupCount=7, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_filepath}")

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
