"""
Structured logging for the XChain client.

The client only emits events; it never configures structlog on import, so
the host application's structlog setup (or structlog's defaults) decides
rendering and level. Applications without their own setup can call
configure_structlog() once at startup for JSON lines on stderr.

Event names are snake_case event types with key/value fields, e.g.
    xchain_service_error  method=POST path=/sends/... status_code=400 error_name=ERR_INVALID_ASSET
Credentials and signature headers are never passed to a logger.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LIBRARY_LOGGER = "xchain_client"


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog(level: str | None = None, log_format: str | None = None) -> None:
    """
    Opt-in structlog setup for applications that have none.

    Args:
        level: Log level name; defaults to LOG_LEVEL env, then INFO.
        log_format: "json" (default, LOG_FORMAT env) or anything else for the console renderer.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    level_value = getattr(logging, level_name, logging.INFO)
    fmt = (log_format or os.getenv("LOG_FORMAT", "json")).strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str) -> Any:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.warning("xchain_transport_failure", error_type="ConnectionError")
    """
    # lazy proxy: configuration is resolved at first use, not at import
    return structlog.get_logger(name, logger=name)


def bind_request(method: str, path: str) -> Any:
    """Logger for one API call: method and endpoint path bound to every event."""
    return get_logger(LIBRARY_LOGGER).bind(method=method, path=path)
