"""Logging configuration.

Everything is expressed as a ``logging.config.dictConfig`` mapping. A JSON
file with the same schema can replace the built-in layout entirely.
"""

import copy
import json
import logging
import logging.config
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# Per-logger levels applied on top of the root level
LOGGER_LEVELS = {
    "localize": "INFO",
    "localize.infra": "WARNING",
    "sqlalchemy": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "ERROR",
}

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints the level name."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # Other handlers share the record
        tinted = copy.copy(record)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def log_file_path(log_dir: str) -> Path:
    return Path(log_dir) / f"localize_{datetime.now():%Y%m%d}.log"


def build_logging_config(debug: bool = False, log_file: bool = False, log_dir: str = "logs") -> Dict[str, Any]:
    level = "DEBUG" if debug else "INFO"
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": level,
            "formatter": "colored",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_file_path(log_dir)),
            "maxBytes": MAX_LOG_BYTES,
            "backupCount": LOG_BACKUPS,
            "encoding": "utf-8",
            "level": "DEBUG",
            "formatter": "detailed",
        }

    loggers = {}
    for name, lvl in LOGGER_LEVELS.items():
        if debug and name.startswith("localize"):
            lvl = "DEBUG"
        loggers[name] = {"level": lvl}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "colored": {"()": ColoredFormatter, "fmt": CONSOLE_FORMAT, "datefmt": "%H:%M:%S"},
            "detailed": {"format": FILE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": level, "handlers": list(handlers)},
    }


def setup_logging(
    log_file: bool = False,
    debug: bool = False,
    log_dir: str = "logs",
    config_path: Optional[str] = None,
) -> None:
    """Configure logging; ``config_path`` names a dictConfig JSON file that wins when present."""
    if config_path and Path(config_path).exists():
        with open(config_path, "r", encoding="utf-8") as f:
            logging.config.dictConfig(json.load(f))
        logging.getLogger(__name__).info("Logging configured from %s", config_path)
        return

    if log_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(debug, log_file, log_dir))
    logging.getLogger(__name__).info(
        "Logging configured (console=%s, file=%s)",
        "DEBUG" if debug else "INFO",
        "ENABLED" if log_file else "DISABLED",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
