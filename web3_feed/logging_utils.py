"""
Logging for aggregation requests.

Events are logged with structured fields (``log_event``) and rendered by
rich on the console and as JSON lines in an optional file. Fields that
describe the current request (address, domain) are bound once with
``request_context`` and attached to every record emitted while it is
active, including records from adapter tasks started inside it.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from enum import Enum
import json
import logging
from pathlib import Path
from typing import Any, Iterator

from rich.logging import RichHandler

from .config import LoggingConfig

LOGGER_NAME = "web3_feed"

_REQUEST_FIELDS: ContextVar[dict[str, Any]] = ContextVar("web3_feed_request_fields", default={})


def setup_logging(cfg: LoggingConfig, output_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger from ``cfg``; handlers are replaced, not added."""
    level = _level_from_string(cfg.level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    handlers: list[logging.Handler] = []
    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if cfg.file and output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(output_dir / cfg.filename, encoding="utf-8")
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(RequestContextFilter())
        logger.addHandler(handler)
    return logger


def log_event(logger: logging.Logger | None, message: str, level: int = logging.INFO, **fields: Any) -> None:
    if logger is None:
        return
    logger.log(level, message, extra=fields)


@contextmanager
def request_context(**fields: Any) -> Iterator[None]:
    """Bind request fields to every record logged inside the block.

    Nested blocks extend the outer fields. Empty values are not bound.
    """
    bound = {**_REQUEST_FIELDS.get(), **{k: v for k, v in fields.items() if v}}
    token = _REQUEST_FIELDS.set(bound)
    try:
        yield
    finally:
        _REQUEST_FIELDS.reset(token)


class RequestContextFilter(logging.Filter):
    """Copy bound request fields onto records that do not set them already."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _REQUEST_FIELDS.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=_json_default)


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED}


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
