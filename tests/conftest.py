"""
Pytest fixtures for xchain-client tests. No network: HTTP goes through a mocked requests.Session.
"""

from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from xchain_client.client import XChainClient
from xchain_client.core.models import Credentials

BASE_URL = "https://xchain.test"
API_TOKEN = "TESTAPITOKEN"
API_SECRET = "TESTAPISECRETKEY"


def _fake_response(status_code: int = 200, body: Any = None, *, raw: bytes | None = None) -> MagicMock:
    """Build a requests.Response-like mock. body is JSON-encoded unless raw bytes are given."""
    resp = MagicMock()
    resp.status_code = status_code
    if raw is not None:
        resp.content = raw
        resp.headers = {"Content-Type": "text/plain"}
    elif body is None:
        resp.content = b""
        resp.headers = {}
    else:
        resp.content = json.dumps(body).encode("utf-8")
        resp.headers = {"Content-Type": "application/json"}
    return resp


def _sent_call(session: MagicMock, index: int = -1) -> dict[str, Any]:
    """Method, url, headers and decoded JSON body of one request sent through the mocked session."""
    call = session.request.call_args_list[index]
    data = call.kwargs.get("data")
    return {
        "method": call.args[0],
        "url": call.args[1],
        "headers": call.kwargs.get("headers") or {},
        "body": json.loads(data.decode("utf-8")) if data else None,
        "raw_body": data,
        "timeout": call.kwargs.get("timeout"),
    }


@pytest.fixture
def fake_response() -> Callable[..., MagicMock]:
    return _fake_response


@pytest.fixture
def sent_call() -> Callable[..., dict[str, Any]]:
    return _sent_call


@pytest.fixture
def credentials():
    return Credentials(base_url=BASE_URL, api_token=API_TOKEN, api_secret_key=API_SECRET)


@pytest.fixture
def session():
    """Mocked requests.Session returning 200 {} unless a test overrides request.return_value."""
    s = MagicMock()
    s.request.return_value = _fake_response(200, {})
    return s


@pytest.fixture
def client(session):
    return XChainClient(BASE_URL, API_TOKEN, API_SECRET, session=session)
