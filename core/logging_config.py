# core/logging_config.py
import logging

from core.config import settings

LOGGER_NAME = "propertypulse"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# The Supabase client's HTTP stack logs every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "apscheduler.executors.default")


def setup_logger(level: str = settings.LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)

    # uvicorn --reload imports this module more than once
    if logger.handlers:
        return logger

    logger.setLevel(level.upper())

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


logger = setup_logger()
