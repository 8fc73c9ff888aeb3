"""
Tests for response classification (interpret) and ApiOutcome.unwrap().
"""

from __future__ import annotations

import json

import pytest
import requests

from xchain_client.core.exceptions import (
    XChainMalformedResponseError,
    XChainServiceError,
    XChainTransportError,
)
from xchain_client.core.models import RawResponse
from xchain_client.core.outcome import (
    EmptySuccess,
    MalformedResponse,
    ServiceError,
    Success,
    TransportFailure,
)
from xchain_client.transport.interpreter import interpret


def _raw(status: int, body: object = None, *, text: str | None = None) -> RawResponse:
    if text is not None:
        payload = text.encode("utf-8")
    elif body is None:
        payload = b""
    else:
        payload = json.dumps(body).encode("utf-8")
    return RawResponse(status_code=status, headers={}, body=payload)


def test_204_is_empty_success():
    outcome = interpret(_raw(204))
    assert isinstance(outcome, EmptySuccess)
    assert outcome.unwrap() == []
    assert outcome.is_ok


def test_200_object_is_success():
    outcome = interpret(_raw(200, {"id": "abc"}))
    assert outcome == Success({"id": "abc"}, 200)
    assert outcome.unwrap() == {"id": "abc"}


def test_201_array_is_success():
    outcome = interpret(_raw(201, [{"id": "a"}, {"id": "b"}]))
    assert isinstance(outcome, Success)
    assert outcome.data == [{"id": "a"}, {"id": "b"}]
    assert outcome.status_code == 201


def test_error_name_is_kept():
    outcome = interpret(_raw(400, {"message": "bad asset", "errorName": "ERR_INVALID_ASSET"}))
    assert outcome == ServiceError("bad asset", 400, "ERR_INVALID_ASSET")
    assert not outcome.is_ok


def test_errors_list_is_joined_after_message():
    body = {"message": "validation failed", "errors": ["asset required", "quantity required"]}
    outcome = interpret(_raw(422, body))
    assert outcome == ServiceError("validation failed asset required quantity required", 422, None)


def test_errors_equal_to_message_not_repeated():
    outcome = interpret(_raw(422, {"message": "asset required", "errors": ["asset required"]}))
    assert outcome == ServiceError("asset required", 422, None)


def test_errors_without_message():
    outcome = interpret(_raw(422, {"errors": ["a", "b"]}))
    assert outcome == ServiceError("a b", 422, None)


def test_message_only():
    outcome = interpret(_raw(404, {"message": "not found"}))
    assert outcome == ServiceError("not found", 404, None)


def test_error_name_without_message_falls_back_to_raw_text():
    raw = _raw(409, {"errorName": "ERR_CONFLICT"})
    outcome = interpret(raw)
    assert outcome.error_name == "ERR_CONFLICT"
    assert outcome.message == raw.text


def test_non_json_error_body_is_opaque_text():
    outcome = interpret(_raw(500, text="not json"))
    assert outcome == ServiceError("not json", 500, None)


def test_json_without_known_fields_uses_raw_text():
    outcome = interpret(_raw(502, {"detail": "upstream"}))
    assert outcome == ServiceError('{"detail": "upstream"}', 502, None)


def test_error_with_json_scalar_body_uses_raw_text():
    outcome = interpret(_raw(400, text='"just a string"'))
    assert outcome == ServiceError('"just a string"', 400, None)


def test_redirect_status_is_a_service_error():
    outcome = interpret(_raw(302, text=""))
    assert isinstance(outcome, ServiceError)
    assert outcome.status_code == 302


@pytest.mark.parametrize("text", ["not json", "", "42", '"ok"', "null"])
def test_2xx_non_object_body_is_malformed(text):
    outcome = interpret(_raw(200, text=text))
    assert outcome == MalformedResponse(raw_body=text, status_code=200)


def test_transport_failure_passes_through():
    failure = TransportFailure(requests.ConnectionError("Connection refused"))
    assert interpret(failure) is failure


def test_unwrap_service_error_raises_typed_exception():
    outcome = interpret(_raw(400, {"message": "bad asset", "errorName": "ERR_INVALID_ASSET"}))
    with pytest.raises(XChainServiceError) as excinfo:
        outcome.unwrap()
    err = excinfo.value
    assert err.message == "bad asset"
    assert err.status_code == 400
    assert err.error_name == "ERR_INVALID_ASSET"
    assert "ERR_INVALID_ASSET" in str(err)


def test_unwrap_transport_failure_chains_cause():
    cause = requests.ConnectionError("Connection refused")
    with pytest.raises(XChainTransportError) as excinfo:
        TransportFailure(cause).unwrap()
    assert excinfo.value.cause is cause
    assert excinfo.value.__cause__ is cause


def test_unwrap_malformed_raises():
    with pytest.raises(XChainMalformedResponseError, match="Unexpected response: oops") as excinfo:
        MalformedResponse("oops", 200).unwrap()
    assert excinfo.value.raw_body == "oops"
    assert excinfo.value.status_code == 200
