"""
Request pipeline: build -> sign -> send -> interpret.

Stateless; credentials are passed in on every call so several differently
configured clients can share a process.
"""

from __future__ import annotations

from typing import Any, Mapping

import requests

from xchain_client.core.models import Credentials
from xchain_client.core.outcome import ApiOutcome
from xchain_client.transport.dispatcher import send_request
from xchain_client.transport.interpreter import interpret
from xchain_client.transport.request_builder import build_request
from xchain_client.transport.signer import sign_request
from xchain_client.xchain_logging import bind_request


def execute(
    credentials: Credentials,
    method: str,
    path: str,
    data: Mapping[str, Any] | None = None,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
    nonce: int | None = None,
) -> ApiOutcome:
    """Run one API call through the full pipeline and return its ApiOutcome."""
    log = bind_request((method or "").upper(), path)
    descriptor = build_request(credentials.base_url, method, path, data)
    signed = sign_request(
        descriptor,
        credentials.api_token,
        credentials.api_secret_key,
        nonce=nonce,
    )
    raw = send_request(signed, session=session, timeout=timeout, log=log)
    return interpret(raw, log=log)
