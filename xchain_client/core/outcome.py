"""
ApiOutcome: the single return channel of the request pipeline.

Each variant is a frozen dataclass. Callers either branch on the variant
(isinstance / is_ok / error_name) or call unwrap(), which returns the
decoded payload or raises the matching XChainError subclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from xchain_client.core.exceptions import (
    XChainMalformedResponseError,
    XChainServiceError,
    XChainTransportError,
)


@dataclass(frozen=True)
class Success:
    """2xx with a JSON object or array body."""

    data: dict[str, Any] | list[Any]
    status_code: int = 200

    is_ok = True

    def unwrap(self) -> dict[str, Any] | list[Any]:
        return self.data


@dataclass(frozen=True)
class EmptySuccess:
    """204 No Content."""

    status_code: int = 204

    is_ok = True

    def unwrap(self) -> list[Any]:
        return []


@dataclass(frozen=True)
class ServiceError:
    """Non-2xx response. error_name is the service's machine-readable code, if any."""

    message: str
    status_code: int
    error_name: str | None = None

    is_ok = False

    def to_exception(self) -> XChainServiceError:
        return XChainServiceError(self.message, self.status_code, self.error_name)

    def unwrap(self) -> Any:
        raise self.to_exception()


@dataclass(frozen=True)
class TransportFailure:
    """No response obtained at all."""

    cause: BaseException

    is_ok = False

    def to_exception(self) -> XChainTransportError:
        return XChainTransportError(self.cause)

    def unwrap(self) -> Any:
        raise self.to_exception() from self.cause


@dataclass(frozen=True)
class MalformedResponse:
    """2xx response whose body is not a JSON object or array."""

    raw_body: str
    status_code: int

    is_ok = False

    def to_exception(self) -> XChainMalformedResponseError:
        return XChainMalformedResponseError(self.raw_body, self.status_code)

    def unwrap(self) -> Any:
        raise self.to_exception()


ApiOutcome = Union[Success, EmptySuccess, ServiceError, TransportFailure, MalformedResponse]
