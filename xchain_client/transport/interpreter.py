"""
Response interpreter: RawResponse | TransportFailure -> ApiOutcome.

Decision order:
1. transport failure            -> TransportFailure
2. status 204                   -> EmptySuccess
3. body not a JSON object/array -> MalformedResponse when 2xx, else treated as unparsed
4. non-2xx                      -> ServiceError (errorName > errors list > message > raw text)
5. 2xx with object/array        -> Success
"""

from __future__ import annotations

import json
from typing import Any

from xchain_client.core.models import RawResponse
from xchain_client.core.outcome import (
    ApiOutcome,
    EmptySuccess,
    MalformedResponse,
    ServiceError,
    Success,
    TransportFailure,
)
from xchain_client.xchain_logging import get_logger

logger = get_logger(__name__)

NO_CONTENT = 204


def _parse_body(raw: RawResponse) -> dict[str, Any] | list[Any] | None:
    """Return the decoded object/array, or None for anything else."""
    if not raw.body:
        return None
    try:
        parsed = json.loads(raw.body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    if isinstance(parsed, (dict, list)):
        return parsed
    return None


def _joined_errors(message: str | None, errors: list[Any]) -> str:
    errors_text = " ".join(str(e) for e in errors)
    if message is None:
        return errors_text
    if errors_text == message:
        return message
    return f"{message} {errors_text}"


def service_error_from(raw: RawResponse, parsed: dict[str, Any] | list[Any] | None) -> ServiceError:
    """Classify a non-2xx response."""
    status = raw.status_code
    body = parsed if isinstance(parsed, dict) else {}
    message = body.get("message")
    if message is not None:
        message = str(message)

    error_name = body.get("errorName")
    if error_name is not None:
        return ServiceError(message if message is not None else raw.text, status, str(error_name))

    errors = body.get("errors")
    if isinstance(errors, list):
        return ServiceError(_joined_errors(message, errors), status, None)

    if message is not None:
        return ServiceError(message, status, None)

    return ServiceError(raw.text, status, None)


def interpret(raw: RawResponse | TransportFailure, *, log: Any = None) -> ApiOutcome:
    """Classify a dispatched request into exactly one ApiOutcome variant."""
    log = log if log is not None else logger
    if isinstance(raw, TransportFailure):
        return raw

    if raw.status_code == NO_CONTENT:
        return EmptySuccess(status_code=raw.status_code)

    parsed = _parse_body(raw)

    if not raw.is_success:
        outcome = service_error_from(raw, parsed)
        log.warning(
            "xchain_service_error",
            status_code=outcome.status_code,
            error_name=outcome.error_name,
            error=outcome.message,
        )
        return outcome

    if parsed is None:
        log.warning("xchain_malformed_response", status_code=raw.status_code, body=raw.text[:200])
        return MalformedResponse(raw_body=raw.text, status_code=raw.status_code)

    return Success(data=parsed, status_code=raw.status_code)
