"""
Core types shared by the request pipeline and the endpoint methods.
"""

from xchain_client.core.exceptions import (
    JsonShapeError,
    SigningError,
    XChainError,
    XChainMalformedResponseError,
    XChainServiceError,
    XChainTransportError,
)
from xchain_client.core.models import Credentials, RawResponse, RequestDescriptor, SignedRequest
from xchain_client.core.outcome import (
    ApiOutcome,
    EmptySuccess,
    MalformedResponse,
    ServiceError,
    Success,
    TransportFailure,
)

__all__ = [
    "ApiOutcome",
    "Credentials",
    "EmptySuccess",
    "JsonShapeError",
    "MalformedResponse",
    "RawResponse",
    "RequestDescriptor",
    "ServiceError",
    "SignedRequest",
    "SigningError",
    "Success",
    "TransportFailure",
    "XChainError",
    "XChainMalformedResponseError",
    "XChainServiceError",
    "XChainTransportError",
]
