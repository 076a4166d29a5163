import logging
import sys

from core.environment import settings


LOG_FORMAT = (
    "%(asctime)s [%(levelname)s] [%(name)s] [%(filename)s] [%(funcName)s]: %(message)s"
)


def configure_uvicorn_logger():
    logging.getLogger("uvicorn").handlers.clear()
    logging.getLogger("uvicorn.access").handlers.clear()
    get_logger("uvicorn")
    get_logger("uvicorn.access")


def get_logger(name: str = "syncbridge_app"):
    logger = logging.getLogger(name)
    log_level = (
        logging.INFO
        if settings.ENVIRONMENT.lower() in ["production", "staging"]
        else logging.DEBUG
    )
    logger.setLevel(log_level)

    # Repeated lookups must not stack handlers
    if logger.handlers:
        return logger

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)
    return logger


app_logger = get_logger()


__all__ = ["app_logger", "configure_uvicorn_logger", "get_logger"]
