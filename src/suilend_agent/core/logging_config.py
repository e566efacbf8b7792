"""Configure logging for the tool service."""
import logging
import logging.config
import os
import sys
import uuid
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

DEV_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PROD_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s"


class ColoredJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that colors the message by level, for terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[37m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color and "message" in log_record:
            log_record["message"] = f"{color}{log_record['message']}{self.RESET}"


class CorrelationFilter(logging.Filter):
    """Stamp every record with the run's correlation ID."""
    def __init__(self, correlation_id: str):
        super().__init__()
        self.correlation_id = correlation_id

    def filter(self, record):
        record.correlation_id = self.correlation_id
        return True


def _dotted(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def build_log_config(level: str = "INFO", env: str = "development", correlation_id: str = "") -> Dict[str, Any]:
    """Build the dictConfig for the given level and environment."""
    development = env == "development"
    formatter_class = ColoredJsonFormatter if development else jsonlogger.JsonFormatter

    # package loggers follow ``level``; server loggers stay quiet
    logger_levels = {
        "suilend_agent": level,
        "uvicorn.access": "WARNING",
        "uvicorn.error": "ERROR",
    }
    loggers: Dict[str, Any] = {
        "": {"handlers": ["console"], "level": "WARNING", "propagate": True},
    }
    for name, logger_level in logger_levels.items():
        loggers[name] = {"handlers": ["console"], "level": logger_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation": {"()": _dotted(CorrelationFilter), "correlation_id": correlation_id},
        },
        "formatters": {
            "json": {
                "()": _dotted(formatter_class),
                "format": DEV_FORMAT if development else PROD_FORMAT,
                "rename_fields": {"levelname": "level", "asctime": "timestamp"},
                "json_default": str,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json",
                "filters": ["correlation"],
                "stream": sys.stderr,
            },
        },
        "loggers": loggers,
    }


def setup_logging(level: str = "INFO", env: Optional[str] = None) -> str:
    """Set up logging configuration and return the run's correlation ID."""
    env = env or os.getenv("ENV", "development")
    correlation_id = str(uuid.uuid4())
    logging.config.dictConfig(build_log_config(level, env, correlation_id))

    logging.getLogger(__name__).info("Logging configured", extra={"correlation_id": correlation_id})
    return correlation_id
