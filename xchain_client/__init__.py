"""
xchain-client: Python client for the XChain blockchain-payment API.

Builds HMAC-signed requests for address, send, multisig, monitor and
account operations and turns the service's JSON (including structured
error payloads) into decoded results or typed XChainError failures.
"""

from xchain_client.client import XChainClient
from xchain_client.core import (
    ApiOutcome,
    Credentials,
    EmptySuccess,
    JsonShapeError,
    MalformedResponse,
    ServiceError,
    SigningError,
    Success,
    TransportFailure,
    XChainError,
    XChainMalformedResponseError,
    XChainServiceError,
    XChainTransportError,
)
from xchain_client.quantity import Quantity

__version__ = "0.1.0"

__all__ = [
    "ApiOutcome",
    "Credentials",
    "EmptySuccess",
    "JsonShapeError",
    "MalformedResponse",
    "Quantity",
    "ServiceError",
    "SigningError",
    "Success",
    "TransportFailure",
    "XChainClient",
    "XChainError",
    "XChainMalformedResponseError",
    "XChainServiceError",
    "XChainTransportError",
]
