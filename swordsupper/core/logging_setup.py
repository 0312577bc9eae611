import logging
import logging.handlers
import os
from typing import Optional

from swordsupper.core.config import config_manager

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = "app.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Third-party loggers that flood INFO with per-request lines
NOISY_LOGGERS = ["urllib3", "aiohttp.access"]


def setup_logging(log_dir: Optional[str] = None, level: Optional[str] = None,
                  logger_name: Optional[str] = None) -> logging.Logger:
    """
    Sends log records to the console and to a rotating file in `log_dir`.
    Configures the root logger unless `logger_name` is given. Calling it again
    on an already configured logger changes nothing.
    """
    log_dir = log_dir or config_manager.get_log_dir()
    level_name = (level or config_manager.get_log_level()).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    if logger.handlers:
        return logger

    os.makedirs(log_dir, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    c_handler = logging.StreamHandler()
    f_handler = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding='utf-8'
    )
    for handler in (c_handler, f_handler):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(f"Logging to {log_dir} at {level_name}")
    return logger
