"""
Tests for the log events emitted by the request pipeline, and that
credentials and signatures never reach a log event.
"""

from __future__ import annotations

import requests
from structlog.testing import capture_logs

from xchain_client.transport.pipeline import execute
from xchain_client.transport.request_builder import build_request
from xchain_client.transport.signer import HEADER_SIGNATURE, sign_request

NONCE = 1_700_000_000


def _events(logs, name):
    return [e for e in logs if e["event"] == name]


def test_service_error_event(credentials, session, fake_response):
    session.request.return_value = fake_response(400, {"message": "bad asset", "errorName": "ERR_INVALID_ASSET"})
    with capture_logs() as logs:
        execute(credentials, "post", "/sends/u1", {"asset": "NOPE"}, session=session)
    (entry,) = _events(logs, "xchain_service_error")
    assert entry["log_level"] == "warning"
    assert entry["status_code"] == 400
    assert entry["error_name"] == "ERR_INVALID_ASSET"
    assert entry["method"] == "POST"
    assert entry["path"] == "/sends/u1"


def test_service_error_without_error_name(credentials, session, fake_response):
    session.request.return_value = fake_response(500, raw=b"not json")
    with capture_logs() as logs:
        execute(credentials, "GET", "/feerates", session=session)
    (entry,) = _events(logs, "xchain_service_error")
    assert entry["status_code"] == 500
    assert entry["error_name"] is None


def test_transport_failure_event(credentials, session):
    session.request.side_effect = requests.ConnectionError("Connection refused")
    with capture_logs() as logs:
        execute(credentials, "GET", "/feerates", session=session)
    (entry,) = _events(logs, "xchain_transport_failure")
    assert entry["log_level"] == "warning"
    assert entry["error_type"] == "ConnectionError"
    assert entry["path"] == "/feerates"


def test_malformed_response_event(credentials, session, fake_response):
    session.request.return_value = fake_response(200, raw=b"<html>")
    with capture_logs() as logs:
        execute(credentials, "GET", "/feerates", session=session)
    (entry,) = _events(logs, "xchain_malformed_response")
    assert entry["status_code"] == 200
    assert entry["body"] == "<html>"


def test_success_dispatch_event(credentials, session, fake_response):
    session.request.return_value = fake_response(200, {"id": "abc"})
    with capture_logs() as logs:
        execute(credentials, "GET", "/addresses/abc", session=session)
    (entry,) = _events(logs, "xchain_request_dispatched")
    assert entry["status_code"] == 200
    assert not _events(logs, "xchain_service_error")


def test_secret_and_signature_never_logged(credentials, session, fake_response):
    """No event from any outcome carries the secret key or the signature header value."""
    responses = [
        fake_response(200, {"id": "abc"}),
        fake_response(400, {"message": "bad", "errorName": "ERR_X"}),
        fake_response(200, raw=b"oops"),
        requests.ConnectionError("Connection refused"),
    ]
    session.request.side_effect = responses
    data = {"asset": "BTC", "quantity": 1}
    with capture_logs() as logs:
        for _ in responses:
            execute(credentials, "POST", "/sends/u1", data, session=session, nonce=NONCE)

    signature = sign_request(
        build_request(credentials.base_url, "POST", "/sends/u1", data),
        credentials.api_token,
        credentials.api_secret_key,
        nonce=NONCE,
    ).headers[HEADER_SIGNATURE]
    assert len(logs) >= len(responses)
    dumped = repr(logs)
    assert credentials.api_secret_key not in dumped
    assert signature not in dumped
