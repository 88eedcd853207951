"""
Shipyard Structured Logger

JSON-lines logger shared by all Shipyard packages. Every record is a single
JSON object on stdout carrying the service name, the current run id (if any),
bound context and any keyword fields passed at the call site.

Usage:
    from shipyard_common.logger import get_logger

    logger = get_logger("sdk.resolver")
    logger.info("Resolving dependencies", root_module="@scope/app")

    scoped = logger.with_context(root_module="@scope/app")
    scoped.debug("Excluding the dependency", dependency="react")
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .constants import LOG_LEVELS, LoggingDefaults

_run_id: ContextVar[Optional[str]] = ContextVar("shipyard_run_id", default=None)


def set_run_id(run_id: str) -> None:
    """Attach a run id to every record logged from the current context."""
    _run_id.set(run_id)


def get_run_id() -> Optional[str]:
    """Return the run id of the current context, or None."""
    return _run_id.get()


def clear_run_id() -> None:
    """Remove the run id from the current context."""
    _run_id.set(None)


class _JSONFormatter(logging.Formatter):
    """Render records produced by ShipyardLogger as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", record.name),
            "message": record.getMessage(),
        }

        run_id = getattr(record, "run_id", None)
        if run_id:
            payload["run_id"] = run_id

        context = getattr(record, "context", None)
        if context:
            payload["context"] = context

        fields = getattr(record, "fields", None)
        if fields:
            payload.update(fields)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _resolve_level(log_level: Optional[str]) -> int:
    level = (log_level or os.environ.get(LoggingDefaults.ENV_VAR) or LoggingDefaults.LEVEL).upper()
    if level not in LOG_LEVELS:
        level = LoggingDefaults.LEVEL
    return getattr(logging, level)


class _StdoutHandler(logging.Handler):
    """Write each record to the current sys.stdout at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            sys.stdout.write(self.format(record) + "\n")
        except Exception:
            self.handleError(record)


def _ensure_handler(logger: logging.Logger) -> None:
    if any(isinstance(h, _StdoutHandler) for h in logger.handlers):
        return
    handler = _StdoutHandler()
    handler.setFormatter(_JSONFormatter())
    logger.addHandler(handler)


class ShipyardLogger:
    """
    Thin structured wrapper around a standard library logger.

    Attributes:
        service_name: Name reported in the "service" field
        context: Key/value pairs attached to every record of this logger
    """

    def __init__(
        self,
        service_name: str,
        log_level: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.service_name = service_name
        self.context: Dict[str, Any] = dict(context or {})
        self._logger = logging.getLogger(f"shipyard.{service_name}")
        _ensure_handler(self._logger)
        self._logger.propagate = False
        if log_level is not None or self._logger.level == logging.NOTSET:
            self._logger.setLevel(_resolve_level(log_level))

    def with_context(self, **kwargs: Any) -> "ShipyardLogger":
        """Return a new logger with extra context; this logger is left unchanged."""
        derived = ShipyardLogger.__new__(ShipyardLogger)
        derived.service_name = self.service_name
        derived.context = {**self.context, **kwargs}
        derived._logger = self._logger
        return derived

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra_fields = fields.pop("extra", None)
        if isinstance(extra_fields, dict):
            fields = {**extra_fields, **fields}
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={
                "service": self.service_name,
                "run_id": get_run_id(),
                "context": self.context,
                "fields": fields,
            },
        )

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    warn = warning

    def error(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, **fields)

    def critical(self, message: str, **fields: Any) -> None:
        self._log(logging.CRITICAL, message, **fields)

    def exception(self, message: str, **fields: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, message, exc_info=True, **fields)


def get_logger(service_name: str, log_level: Optional[str] = None) -> ShipyardLogger:
    """
    Create a structured logger for a service or module.

    Args:
        service_name: Name reported on every record (e.g. "sdk.resolver")
        log_level: Optional level name; defaults to $SHIPYARD_LOG_LEVEL or INFO

    Returns:
        ShipyardLogger instance
    """
    return ShipyardLogger(service_name, log_level=log_level)


def configure_logging(service_name: str, log_level: str = LoggingDefaults.LEVEL) -> ShipyardLogger:
    """
    Set the level for every Shipyard logger and return one for the service.

    Called once by entry points (the CLI) before any work starts.
    """
    logging.getLogger("shipyard").setLevel(_resolve_level(log_level))
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith("shipyard.") and isinstance(existing, logging.Logger):
            existing.setLevel(_resolve_level(log_level))
    return ShipyardLogger(service_name, log_level=log_level)
