# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - ACI JOB RUNNER
# STATUS: Core - Structured logging with context
# PURPOSE: Job-scoped log context, JSON/human formatters, lifecycle checkpoints
# CREATED: 14 SEP 2026
# ============================================================================
"""
Structured Logging

Every line logged during a run carries the job name and container name, so a
single container group can be followed through the Functions host logs.

Usage:
    from core.logging import get_logger, log_context, ComponentType

    logger = get_logger(__name__, ComponentType.RUNNER)

    with log_context(job_name="job-1726300000000-1a2b3c4d"):
        logger.info("Polling container group")

Inside the Functions host the root logger is owned by the host, so the
function app never calls configure_logging(). The container entry point does.
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from enum import Enum


class ComponentType(str, Enum):
    """Which part of the runner emitted a line."""
    FUNCTION = "function"
    RUNNER = "runner"
    PROVIDER = "provider"
    STORAGE = "storage"
    UPLOADER = "uploader"


@dataclass(frozen=True)
class LogContext:
    """Fields attached to every record logged inside log_context()."""
    job_name: Optional[str] = None
    container_name: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            key: value
            for key, value in (
                ("job_name", self.job_name),
                ("container_name", self.container_name),
                ("operation", self.operation),
            )
            if value is not None
        }
        result.update(self.extra)
        return result


_local = threading.local()
_EMPTY_CONTEXT = LogContext()


def _stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost active context for this thread (empty when none)."""
    stack = _stack()
    return stack[-1] if stack else _EMPTY_CONTEXT


@contextmanager
def log_context(**fields):
    """
    Push a logging context for the duration of the block.

    Unspecified fields are inherited from the enclosing context; `extra`
    dicts are merged.

    Example:
        with log_context(job_name="job-123", operation="poll"):
            logger.info("Polling")
    """
    parent = get_current_context()
    extra = {**parent.extra, **fields.pop("extra", {})}
    context = replace(parent, extra=extra, **fields)

    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            entry["context"] = context

        data = getattr(record, "extra", None)
        if data:
            entry["data"] = data

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line format with job and container inline."""

    def format(self, record: logging.LogRecord) -> str:
        context = get_current_context()
        tags = []
        if context.job_name:
            tags.append(f"job={context.job_name}")
        if context.container_name:
            tags.append(f"container={context.container_name}")
        tag_str = f" [{', '.join(tags)}]" if tags else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} {record.levelname:<8} {record.name}{tag_str}: {record.getMessage()}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class ContextLogger(logging.LoggerAdapter):
    """Adapter that stamps the component and current context onto each record."""

    def process(self, msg, kwargs):
        data = {"component": self.extra.get("component")}
        data.update(get_current_context().to_dict())
        data.update(kwargs.get("extra", {}))
        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """Context-aware logger for a module."""
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component else None},
    )


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
) -> None:
    """
    Install a single stdout handler on the root logger.

    For standalone processes only (the job container).

    Args:
        level: Log level name or number
        json_output: JSON lines instead of human format
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if json_output else HumanFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)


# ============================================================================
# CHECKPOINTS
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named lifecycle transition ("job_submitted", "job_cleaned_up", ...).

    The checkpoint payload rides on the record as `extra` so the JSON
    formatter emits it under "data".
    """
    payload: Dict[str, Any] = {"checkpoint": name, "timestamp": _utc_timestamp()}

    job_name = get_current_context().job_name
    if job_name:
        payload["job_name"] = job_name
    if data:
        payload["data"] = data

    (logger or logging.getLogger("checkpoint")).info(
        f"CHECKPOINT: {name}", extra={"extra": payload}
    )


__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
