import logging
import os

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(sh)
    return logger
