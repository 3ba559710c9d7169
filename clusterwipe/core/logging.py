"""Structured logging with JSON support and correlation IDs."""
import json
import logging
import uuid
import functools
import time
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple, Union

_RUN_ID: Optional[str] = None

CONTEXT_FIELDS = ("cluster_id", "engine", "resource_id", "dry_run")


def get_run_id() -> str:
    """Get or create the current run ID."""
    global _RUN_ID
    if _RUN_ID is None:
        _RUN_ID = str(uuid.uuid4())[:8]
    return _RUN_ID


class JSONFormatter(logging.Formatter):
    """JSON log formatter with structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "run_id": get_run_id(),
            "message": record.getMessage(),
        }
        # Add extra fields if present
        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that attaches context fields to every record.

    ``with_fields`` returns a child adapter, so a client can narrow its
    logger to a cluster, then an engine, then a single resource.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(extra or {}))

    def with_fields(self, **fields: Any) -> "ContextLogger":
        merged = dict(self.extra)
        merged.update(fields)
        return ContextLogger(self.logger, merged)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(logger: Union[logging.Logger, logging.LoggerAdapter, None] = None,
               **fields: Any) -> ContextLogger:
    """Wrap an injected logger (or the package logger) in a ContextLogger."""
    if logger is None:
        return ContextLogger(logging.getLogger("clusterwipe"), fields)
    if isinstance(logger, ContextLogger):
        return logger.with_fields(**fields)
    if isinstance(logger, logging.LoggerAdapter):
        base = dict(logger.extra or {})
        base.update(fields)
        return ContextLogger(logger.logger, base)
    return ContextLogger(logger, fields)


def setup_logging(verbosity: int = 0, json_format: bool = False) -> None:
    """Configure logging with optional JSON output.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2=DEBUG
        json_format: Use JSON formatter if True
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(run_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    # Add run_id to all log records, once per process
    old_factory = logging.getLogRecordFactory()
    if not getattr(old_factory, "adds_run_id", False):
        def record_factory(*args, **kwargs):
            record = old_factory(*args, **kwargs)
            record.run_id = get_run_id()
            return record
        record_factory.adds_run_id = True
        logging.setLogRecordFactory(record_factory)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def timed(func):
    """Decorator to log function execution time.

    On a method whose instance has a ``logger`` attribute the timing goes to
    that logger, otherwise to the package logger.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start
        log = getattr(args[0], "logger", None) if args else None
        if log is None:
            log = logging.getLogger("clusterwipe")
        log.info(f"{func.__name__} took {elapsed:.2f}s")
        return result
    return wrapper
