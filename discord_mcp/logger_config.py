"""Logging configuration for the Discord MCP server.

Two loggers are configured here:
- ``mcp_call_logger`` records every tool invocation (arguments, result, errors)
  to a rotating log file through the ``log_mcp_call`` decorator.
- ``error_logger`` emits structured JSON records for failures through
  ``log_structured_error``.

Nothing is written to stdout: in stdio mode stdout carries the MCP protocol.
"""

import datetime
import functools
import json
import logging
import os
import sys
import traceback
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from .metrics_config import record_tool_call_error
from .metrics_config import record_tool_call_start
from .metrics_config import record_tool_call_success

# --- Logging Setup ---
mcp_call_logger = logging.getLogger("mcp_call_logger")
mcp_call_logger.setLevel(logging.INFO)

_log_dir = Path(os.environ.get("DISCORD_MCP_LOG_DIR", Path(__file__).resolve().parent))
_log_dir.mkdir(parents=True, exist_ok=True)
log_file_path = _log_dir / "mcp_calls.log"

# maxBytes: 10MB per file, backupCount: 5 files (total ~50MB)
file_handler = RotatingFileHandler(log_file_path, maxBytes=10 * 1024 * 1024, backupCount=5)
formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
file_handler.setFormatter(formatter)
mcp_call_logger.addHandler(file_handler)
mcp_call_logger.propagate = False


class ErrorCategory(Enum):
    """Severity categories for structured error logging."""

    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


_CATEGORY_LEVELS = {
    ErrorCategory.CRITICAL: logging.CRITICAL,
    ErrorCategory.ERROR: logging.ERROR,
    ErrorCategory.WARNING: logging.WARNING,
    ErrorCategory.INFO: logging.INFO,
}

# Attributes present on every LogRecord; anything else was passed through ``extra``.
_RESERVED_RECORD_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class StructuredLogFormatter(logging.Formatter):
    """Format log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        for key, value in vars(record).items():
            if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


error_logger = logging.getLogger("discord_mcp.errors")
error_logger.setLevel(logging.INFO)
_error_handler = logging.StreamHandler(sys.stderr)
_error_handler.setFormatter(StructuredLogFormatter())
error_logger.addHandler(_error_handler)
error_logger.propagate = False


def log_structured_error(
    category: ErrorCategory,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    operation: str | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with its category, operation and context as structured fields."""
    extra: dict[str, Any] = {"error_category": category.value}
    if operation:
        extra["operation"] = operation
    if context:
        extra.update(context)
    if exception is not None:
        extra["exception_type"] = type(exception).__name__
        to_dict = getattr(exception, "to_dict", None)
        if callable(to_dict):
            extra["error_details"] = to_dict()
    extra.update(kwargs)

    error_logger.log(
        _CATEGORY_LEVELS[category],
        message,
        extra=extra,
        exc_info=exception,
    )


def _describe(value: Any) -> str:
    if hasattr(value, "model_dump_json"):  # Pydantic v2 model
        return value.model_dump_json(indent=None, exclude_none=True)
    return repr(value)


def _format_call(args: tuple, kwargs: dict) -> str:
    try:
        logged_args = [_describe(arg) for arg in args]
        logged_kwargs = {k: _describe(v) for k, v in kwargs.items()}
        return f"args={logged_args}, kwargs={logged_kwargs}"
    except Exception as e:
        return f"args/kwargs logging error: {e}"


def _result_size(result: Any) -> int:
    if isinstance(result, str):
        return len(result.encode("utf-8"))
    return len(str(result)) if result is not None else 0


def _record_start(func_name: str, args: tuple, kwargs: dict) -> float | None:
    try:
        return record_tool_call_start(func_name, args, kwargs)
    except Exception as e:
        # Metrics problems never break the tool call
        mcp_call_logger.warning(f"Metrics recording failed for {func_name}: {e}")
        return None


def _record_success(func_name: str, start_time: float | None, result: Any) -> None:
    try:
        record_tool_call_success(func_name, start_time, _result_size(result))
    except Exception as e:
        mcp_call_logger.warning(f"Metrics success recording failed for {func_name}: {e}")
    mcp_call_logger.info(f"Tool {func_name} returned: {_describe(result)}")


def _record_error(func_name: str, start_time: float | None, error: Exception) -> None:
    try:
        record_tool_call_error(func_name, start_time, error)
    except Exception as metrics_error:
        mcp_call_logger.warning(f"Metrics error recording failed for {func_name}: {metrics_error}")
    mcp_call_logger.error(f"Tool {func_name} raised exception: {error}", exc_info=True)


# --- Decorator for Logging MCP Calls with Metrics ---
def log_mcp_call(func):
    """Log arguments, result and failures of a coroutine tool call and record metrics.

    The wrapper keeps the wrapped signature so FastMCP still sees the tool
    parameters.
    """
    func_name = getattr(func, "__name__", "unknown_function")

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = _record_start(func_name, args, kwargs)
        mcp_call_logger.info(f"Calling tool: {func_name} with {_format_call(args, kwargs)}")
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            _record_error(func_name, start_time, e)
            raise
        _record_success(func_name, start_time, result)
        return result

    return wrapper
