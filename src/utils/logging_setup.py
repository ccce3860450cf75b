"""
Logging configuration for the snapshot ETL framework.

Console output goes to stderr. Development uses a plain text format, production
emits one JSON object per record so that stage metrics passed through
``extra`` (stage, record_count, elapsed_seconds, ...) become searchable keys.
"""

import functools
import json
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
JSON_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Attributes every LogRecord has; anything else arrived through ``extra``
_RESERVED_RECORD_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName',
    'message', 'asctime',
])


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        )

        # Dates and paths in extras are rendered with str()
        return json.dumps(entry, default=str)


def _formatter_for(environment: str) -> logging.Formatter:
    if environment == "production":
        return JSONFormatter(datefmt=JSON_DATE_FORMAT)
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(environment: str = "development",
                  log_level: str = "INFO",
                  log_dir: Optional[str] = None) -> None:
    """
    Configure the root logger for a run.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        environment: Environment name; "production" selects JSON output
        log_level: Level name (DEBUG/INFO/WARNING/ERROR)
        log_dir: When set, also write ``etl_<environment>.log`` there with
            size-based rotation

    Raises:
        AttributeError: ``log_level`` is not a logging level name
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper()))
    root.handlers = []

    formatter = _formatter_for(environment)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path / f"etl_{environment}.log"),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (typically ``__name__``)."""
    return logging.getLogger(name)


def log_performance(func):
    """
    Decorator logging start, completion time and failure of ``func``.

    Exceptions are logged and re-raised unchanged.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start = time.perf_counter()

        logger.info(f"Starting {func.__name__}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Failed {func.__name__} after {time.perf_counter() - start:.3f}s: {e}")
            raise
        logger.info(f"Completed {func.__name__} in {time.perf_counter() - start:.3f}s")
        return result

    return wrapper
