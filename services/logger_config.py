# services/logger_config.py
import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

from config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_logging(console_level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the demo logger.

    The console shows warnings and above so log lines stay out of the step-by-step
    demo output; the rotating file under log/ keeps the full DEBUG trace of every
    request made to the platform. Safe to call more than once.
    """
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    log_file = log_file or settings.LOG_FILE_PATH
    try:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=5
        )
    except OSError as e:
        logger.warning(f"Request log disabled, cannot write to {log_file}: {e}")
        return logger

    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    logger.info(f"Logging platform requests to {log_file}")
    return logger
