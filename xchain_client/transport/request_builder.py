"""
Request builder: (method, path, data) -> RequestDescriptor.

GET data goes into an RFC 3986 query string; POST/PATCH data becomes a
compact JSON body. Nothing here touches the network or the clock.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Mapping
from urllib.parse import quote, urlencode

import requests

from xchain_client.core.models import RequestDescriptor

API_PREFIX = "/api/v1"
SUPPORTED_METHODS = ("GET", "POST", "PATCH", "DELETE")
BODY_METHODS = ("POST", "PATCH")
JSON_CONTENT_TYPE = "application/json"


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        # int when integral so satoshi amounts stay integers on the wire
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json_body(data: Mapping[str, Any]) -> bytes:
    """Compact JSON, key order preserved."""
    text = json.dumps(dict(data), separators=(",", ":"), ensure_ascii=False, default=_json_default)
    return text.encode("utf-8")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def encode_query(data: Mapping[str, Any]) -> str:
    """
    Encode data as an &-joined query string with RFC 3986 percent-encoding.

    None values are omitted, booleans become 1/0, lists are comma-joined
    (the comma itself is percent-encoded).
    """
    pairs = [(str(k), _query_value(v)) for k, v in data.items() if v is not None]
    return urlencode(pairs, quote_via=quote, safe="")


def build_url(base_url: str, path: str) -> str:
    if path and not path.startswith("/"):
        path = "/" + path
    return f"{base_url.rstrip('/')}{API_PREFIX}{path}"


def wire_url(method: str, url: str) -> str:
    """
    Return url exactly as requests will put it on the wire.

    requests lower-cases scheme and host, IDNA-encodes the host and
    percent-encodes spaces and non-ASCII characters when it prepares a
    request. The signature has to cover that form, not the raw string.
    """
    return requests.Request(method, url).prepare().url


def build_request(
    base_url: str,
    method: str,
    path: str,
    data: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """
    Build the unsigned request descriptor for one API call.

    Args:
        base_url: Service base URL (e.g. https://xchain.example.com).
        method: GET, POST, PATCH or DELETE (case-insensitive).
        path: Endpoint path below /api/v1, e.g. /addresses/{uuid}. May carry
            its own query string.
        data: Ordered key/value mapping. Query parameters for GET, JSON body
            for POST/PATCH, ignored otherwise.

    Returns:
        RequestDescriptor with absolute URL, headers and body bytes (or None).
    """
    verb = (method or "").upper()
    if verb not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method!r}")

    url = build_url(base_url, path)
    data = data or {}
    headers: dict[str, str] = {"Accept": JSON_CONTENT_TYPE}
    body: bytes | None = None

    if verb == "GET":
        query = encode_query(data)
        if query:
            url = f"{url}{'&' if '?' in url else '?'}{query}"
    elif verb in BODY_METHODS and data:
        body = encode_json_body(data)
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return RequestDescriptor(method=verb, url=wire_url(verb, url), headers=headers, body=body)
