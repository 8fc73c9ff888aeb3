"""
Data models for the request pipeline.

Credentials are immutable and owned by one client. A RequestDescriptor is
built fresh per call, signed once, dispatched once and discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class Credentials:
    """
    Service location and API key pair.

    api_token identifies which secret the server verifies with; the secret
    itself never leaves the process.
    """

    base_url: str
    api_token: str
    api_secret_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise ValueError("base_url must be non-empty")

    @classmethod
    def from_env(cls) -> "Credentials":
        """Build from XCHAIN_URL / XCHAIN_API_TOKEN / XCHAIN_API_SECRET_KEY."""
        from xchain_client.config.env import get_api_secret_key, get_api_token, get_xchain_url

        return cls(
            base_url=get_xchain_url(),
            api_token=get_api_token(),
            api_secret_key=get_api_secret_key(),
        )


@dataclass(frozen=True)
class RequestDescriptor:
    """Outgoing request before signing: method, absolute URL, headers, body bytes."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def with_headers(self, extra: Mapping[str, str]) -> "RequestDescriptor":
        """Return a copy with extra headers added (or overwritten)."""
        merged = dict(self.headers)
        merged.update(extra)
        return replace(self, headers=merged)


@dataclass(frozen=True)
class SignedRequest:
    """
    RequestDescriptor carrying signature headers.

    Frozen so the transmitted method, URL and body stay the ones the
    signature was computed over.
    """

    descriptor: RequestDescriptor
    nonce: int

    @property
    def method(self) -> str:
        return self.descriptor.method

    @property
    def url(self) -> str:
        return self.descriptor.url

    @property
    def headers(self) -> dict[str, str]:
        return self.descriptor.headers

    @property
    def body(self) -> bytes | None:
        return self.descriptor.body


@dataclass(frozen=True)
class RawResponse:
    """An HTTP response as received, before interpretation."""

    status_code: int
    headers: dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def from_requests(cls, resp: Any) -> "RawResponse":
        """Build from a requests.Response."""
        return cls(
            status_code=int(resp.status_code),
            headers=dict(resp.headers or {}),
            body=resp.content or b"",
        )
