import json
import logging
import sys
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars

from weatherflow.config.settings import settings

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"

# Request-scoped keys held in structlog contextvars
CONTEXT_FIELDS = ("correlation_id", "request_id")

# Standard LogRecord attributes; anything else on a record is an extra
_STANDARD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "taskName"}


def _colorize(levelname: str, text: str, enabled: bool) -> str:
    color = LEVEL_COLORS.get(levelname) if enabled else None
    return f"{color}{text}{RESET}" if color else text


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool, type(None), list, dict)):
        return value
    return str(value)


class ContextFilter(logging.Filter):
    """
    Copy the bound request context onto each record

    Explicit ``extra`` values win over the context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_contextvars()
        for key in CONTEXT_FIELDS:
            if getattr(record, key, None) is None and context.get(key):
                setattr(record, key, context[key])
        return True


class ColorizedJSONFormatter(logging.Formatter):
    """
    One JSON object per record, optionally indented and coloured by level
    """

    def __init__(self, enable_color: bool = True, pretty_print: bool = False):
        super().__init__()
        self.enable_color = enable_color
        self.pretty_print = pretty_print

    def _payload(self, record: logging.LogRecord) -> Dict[str, Any]:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        payload.update(
            (key, getattr(record, key)) for key in CONTEXT_FIELDS if getattr(record, key, None)
        )

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        extra = {
            key: _jsonable(value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and key not in CONTEXT_FIELDS
        }
        if extra:
            payload["extra"] = extra
        return payload

    def format(self, record: logging.LogRecord) -> str:
        if self.pretty_print:
            text = json.dumps(self._payload(record), indent=2, ensure_ascii=False, default=str)
        else:
            text = json.dumps(self._payload(record), ensure_ascii=False, separators=(",", ":"), default=str)
        return _colorize(record.levelname, text, self.enable_color)


class PrettyFormatter(logging.Formatter):
    """
    Single-line console format: time, level, logger:line, message
    """

    def __init__(self, enable_color: bool = True):
        super().__init__()
        self.enable_color = enable_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        parts = [f"[{timestamp}] {record.levelname:8} {record.name}:{record.lineno} - {record.getMessage()}"]

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            parts.append(f" [correlation_id={correlation_id}]")
        if record.exc_info:
            parts.append("\n" + self.formatException(record.exc_info))

        return _colorize(record.levelname, "".join(parts), self.enable_color)


def build_formatter() -> logging.Formatter:
    """Pick the formatter described by the LOG_* settings"""
    if settings.LOG_FORMAT == "pretty" and settings.LOG_PRETTY:
        return PrettyFormatter(enable_color=settings.LOG_COLOR)
    return ColorizedJSONFormatter(
        enable_color=settings.LOG_COLOR,
        pretty_print=settings.LOG_PRETTY and settings.LOG_FORMAT == "json",
    )


class CorrelationLogger:
    """
    Stdout logger whose records carry the current correlation context

    The context lives in structlog contextvars, so it follows the request
    through awaits without being passed around.
    """

    def __init__(self, name: str = "weatherflow"):
        self.name = name
        self._logger = logging.getLogger(name)
        self._configure()

    def _configure(self):
        self._logger.setLevel(settings.LOG_LEVEL)
        self._logger.propagate = False

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter())
        self._logger.handlers[:] = [handler]

        self._logger.filters[:] = [ContextFilter()]

    def _log(self, level: int, msg: str, *args, **kwargs):
        # Report the caller of debug()/info()/... as the record's origin
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        self._log(logging.CRITICAL, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        """ERROR with the active exception's traceback"""
        kwargs["exc_info"] = True
        self._log(logging.ERROR, msg, *args, **kwargs)

    def set_context(self, **context):
        bind_contextvars(**context)

    def clear_context(self):
        clear_contextvars()


logger = CorrelationLogger(name="weatherflow")


def get_logger(name: str = "weatherflow") -> CorrelationLogger:
    return CorrelationLogger(name=name)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    return get_contextvars().get("correlation_id")


def set_correlation_id(correlation_id: str):
    bind_contextvars(correlation_id=correlation_id)
