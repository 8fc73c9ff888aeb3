"""
Transport dispatcher: one blocking HTTP call per signed request.

Any HTTP status (2xx or not) comes back as a RawResponse for the
interpreter. Only "no response at all" becomes a TransportFailure.
"""

from __future__ import annotations

from typing import Any

import requests

from xchain_client.core.models import RawResponse, SignedRequest
from xchain_client.core.outcome import TransportFailure
from xchain_client.xchain_logging import get_logger

logger = get_logger(__name__)


def send_request(
    signed: SignedRequest,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
    log: Any = None,
) -> RawResponse | TransportFailure:
    """
    Send a signed request once. No retries.

    Args:
        signed: Output of sign_request(); sent byte-for-byte as signed.
        session: Optional requests.Session (connection reuse is the caller's choice).
        timeout: Seconds for connect/read; None uses the requests default.
        log: Logger to emit through; pipeline.execute passes one bound to method and path.
    """
    log = log if log is not None else logger
    http = session if session is not None else requests
    try:
        resp = http.request(
            signed.method,
            signed.url,
            headers=signed.headers,
            data=signed.body,
            timeout=timeout,
            allow_redirects=False,
        )
    except requests.RequestException as e:
        log.warning(
            "xchain_transport_failure",
            method=signed.method,
            url=signed.url,
            error_type=type(e).__name__,
            error=str(e),
        )
        return TransportFailure(cause=e)

    log.debug(
        "xchain_request_dispatched",
        method=signed.method,
        url=signed.url,
        status_code=resp.status_code,
    )
    return RawResponse.from_requests(resp)
