"""
Logging setup shared by the pods CLI and HTTP service.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with log_with_extra() fields under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data
        return json.dumps(log_data)


class SimpleFormatter(logging.Formatter):
    """LEVEL [timestamp]: message"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%dT%H:%M:%S')
        log_line = f"{self.format_level(record)} [{timestamp}]: {record.getMessage()}"
        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)
        return log_line

    def format_level(self, record: logging.LogRecord) -> str:
        return record.levelname


class ColoredFormatter(SimpleFormatter):
    """SimpleFormatter with ANSI-colored level names, for terminals."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format_level(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        return f"{color}{record.levelname}{self.RESET}"


def setup_logging(log_level: str = "INFO", json_logs: bool = False, colored: bool = False) -> None:
    """
    Send all pods logging to stdout.

    Args:
        log_level: Level name; unknown names fall back to INFO
        json_logs: Emit JSON records instead of plain lines
        colored: Color the level name of plain lines
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    if json_logs:
        handler.setFormatter(JSONFormatter())
    elif colored:
        handler.setFormatter(ColoredFormatter())
    else:
        handler.setFormatter(SimpleFormatter())
    root_logger.addHandler(handler)

    # requests and the ASGI server are chatty at INFO
    for name in ("urllib3", "httpx", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_extra(logger: logging.Logger, level: str, message: str, **kwargs) -> None:
    """Log message at level, attaching kwargs as structured data for JSONFormatter."""
    log_func = getattr(logger, level.lower())
    extra = {"extra_data": kwargs} if kwargs else {}
    log_func(message, extra=extra)
