"""Logging setup.

Service logs go to the console and a rotating ``fieldform.log``. Threshold
alerts written by the console notification channel are also kept in a
separate rotating ``alerts.log`` next to it.
"""

import copy
import logging.config
from pathlib import Path

from .consts import LOG_FILE_DEFAULT
from .utils import canonicalify, ensure_path

ALERTS_LOG_NAME = "alerts.log"

_ROTATING = {
    "class": "logging.handlers.RotatingFileHandler",
    "formatter": "default",
    "maxBytes": 5 * 1024 * 1024,  # 5MB
    "backupCount": 10,
    "encoding": "utf-8",
}

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] [%(name)s] [%(threadName)s] - %(message)s"
        },
        "alert": {"format": "%(asctime)s - %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": logging.INFO,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
        "file": {**_ROTATING, "level": logging.DEBUG, "filename": LOG_FILE_DEFAULT},
        "alerts": {**_ROTATING, "level": logging.WARNING, "formatter": "alert"},
    },
    "loggers": {
        "fieldform": {
            "handlers": ["console", "file"],
            "level": logging.DEBUG,
            "propagate": True,
        },
        "fieldform.alerts": {
            "handlers": ["alerts"],
            "level": logging.WARNING,
            "propagate": True,
        },
    },
}


def setup(logfile: str | Path | None = None, console_level: str | int = logging.INFO) -> Path:
    """Configure logging and return the resolved service log path.

    The alerts log is placed in the same directory as ``logfile``.
    """
    config = copy.deepcopy(LOGGING_CONFIG)

    log_path = canonicalify(logfile or config["handlers"]["file"]["filename"])
    ensure_path(log_path.parent)

    config["handlers"]["file"]["filename"] = str(log_path)
    config["handlers"]["alerts"]["filename"] = str(log_path.with_name(ALERTS_LOG_NAME))
    config["handlers"]["console"]["level"] = console_level

    logging.config.dictConfig(config)
    return log_path
