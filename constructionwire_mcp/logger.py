"""Structured logging for the ConstructionWire MCP server.

Every line goes to the standard ``logging`` machinery (stderr, so the stdio
MCP transport stays clean) as ``[EVENT_CODE] message {context}``. When a
:class:`~constructionwire_mcp.log_shipper.LogShipper` is attached, entries at
or above its threshold are also queued for batched delivery.
"""

import json
import logging
import sys
import time
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .log_shipper import LogShipper

LOG_FORMAT = '[%(levelname)s] %(message)s'

SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "api_key", "apikey")
REDACTED = "[REDACTED]"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT)


def redact(context: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``context`` with secret-looking values replaced"""
    if not context:
        return {}
    cleaned: Dict[str, Any] = {}
    for key, value in context.items():
        lowered = key.lower()
        if any(marker in lowered for marker in SENSITIVE_KEYS):
            cleaned[key] = REDACTED
        elif isinstance(value, dict):
            cleaned[key] = redact(value)
        else:
            cleaned[key] = value
    return cleaned


def token_preview(token: str) -> str:
    return f"{token[:8]}..."


class Logger:
    """Event-coded logging facade used by the request pipeline

    Args:
        name: Name of the underlying stdlib logger
        shipper: Optional log shipper receiving a copy of every entry
    """

    def __init__(self, name: str = "constructionwire_mcp", shipper: Optional["LogShipper"] = None):
        self._logger = logging.getLogger(name)
        self.shipper = shipper

    def _log(self, level: int, event_code: str, message: str, context: Optional[Dict[str, Any]]) -> None:
        safe_context = redact(context)
        if safe_context:
            line = f"[{event_code}] {message} {json.dumps(safe_context, default=str)}"
        else:
            line = f"[{event_code}] {message}"
        self._logger.log(level, line)
        if self.shipper is not None:
            self.shipper.enqueue({
                "timestamp": time.time(),
                "level": logging.getLevelName(level),
                "event": event_code,
                "message": message,
                "context": safe_context,
            })

    def debug(self, event_code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, event_code, message, context)

    def info(self, event_code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, event_code, message, context)

    def warn(self, event_code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, event_code, message, context)

    def error(self, event_code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, event_code, message, context)

    # Request pipeline events

    def log_request_start(self, method: str, url: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.info("REQUEST_START", f"{method} {url}", context)

    def log_request_success(
        self,
        method: str,
        url: str,
        status: int,
        duration_ms: float,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        ctx = {"status": status, "duration_ms": round(duration_ms, 1), **(context or {})}
        self.info("REQUEST_SUCCESS", f"{method} {url} -> {status}", ctx)

    def log_request_error(
        self,
        method: str,
        url: str,
        error: BaseException,
        duration_ms: float,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        ctx = {
            "error_type": type(error).__name__,
            "error": str(error),
            "duration_ms": round(duration_ms, 1),
            **(context or {}),
        }
        status = getattr(error, "status", None)
        if status is not None:
            ctx["status"] = status
        self.error("REQUEST_ERROR", f"{method} {url} failed", ctx)

    def log_request_cancelled(
        self,
        method: str,
        url: str,
        duration_ms: float,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        ctx = {"duration_ms": round(duration_ms, 1), **(context or {})}
        self.info("REQUEST_CANCELLED", f"{method} {url} was cancelled", ctx)

    def log_rate_limit(self, wait_ms: float, context: Optional[Dict[str, Any]] = None) -> None:
        self.debug("RATE_LIMIT", f"Throttling request for {wait_ms:.0f}ms", context)

    def log_retry(self, attempt: int, delay_ms: float, status: int, context: Optional[Dict[str, Any]] = None) -> None:
        ctx = {"attempt": attempt, "delay_ms": round(delay_ms), "status": status, **(context or {})}
        self.warn("RETRY", f"Retrying after HTTP {status}", ctx)

    def log_auth_event(self, event: str, success: bool, context: Optional[Dict[str, Any]] = None) -> None:
        if success:
            self.debug("AUTH_APPLIED", event, context)
        else:
            self.error("AUTH_FAILED", event, context)


__all__ = [
    "Logger",
    "configure_logging",
    "redact",
    "token_preview",
    "LEVELS",
]
