import json
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, MutableMapping, Tuple

from launchpad.core.config import settings

# Fields every record carries in the current request or task
_log_context: ContextVar[Dict[str, Any]] = ContextVar("launchpad_log_context", default={})

# Grouped under "pagination" so one page request reads as one object
PAGINATION_KEYS = (
    "after",
    "page_size",
    "next_cursor",
    "last_cursor",
    "has_more",
    "item_count",
    "collection_size",
)

_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Libraries that log every request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def bind_context(**fields: Any) -> None:
    """Attach fields to every record logged from the current context"""
    _log_context.set({**_log_context.get(), **fields})


def current_context() -> Dict[str, Any]:
    return dict(_log_context.get())


def clear_context() -> None:
    _log_context.set({})


class LogContext(logging.LoggerAdapter):
    """
    Logger that merges the bound context into each record's extra fields

    Per-call extra wins over bound fields with the same name.
    """

    def __init__(self, name: str | None = None):
        super().__init__(logging.getLogger(name), {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**_log_context.get(), **(kwargs.get("extra") or {})}
        return msg, kwargs


class StructuredFormatter(logging.Formatter):
    """Renders a record as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, settings.LOG_DATE_FORMAT),
            "level": record.levelname,
            "service": settings.PROJECT_NAME,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
        }

        fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
        }

        request_id = fields.pop("request_id", None)
        if request_id:
            entry["request_id"] = request_id

        pagination = {key: fields.pop(key) for key in PAGINATION_KEYS if key in fields}
        if pagination:
            entry["pagination"] = pagination

        entry.update(fields)

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["error"] = {"type": type(exc).__name__, "message": str(exc)}

        return json.dumps(entry, default=str)


@contextmanager
def log_duration(logger: LogContext, operation: str) -> Iterator[None]:
    """Log how long the wrapped block took, at ERROR if it raised"""
    start = time.perf_counter()
    try:
        yield
    except Exception:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.error(
            f"{operation} failed after {duration_ms}ms",
            extra={"operation": operation, "duration_ms": duration_ms},
            exc_info=True,
        )
        raise

    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.debug(
        f"{operation} took {duration_ms}ms",
        extra={"operation": operation, "duration_ms": duration_ms},
    )


def setup_logging() -> None:
    """Send JSON records to the log file, and warnings and above to stderr"""
    formatter = StructuredFormatter()

    file_handler = logging.FileHandler(settings.LOG_FILE)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL)
    root_logger.handlers = [file_handler, console_handler]

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    clear_context()
