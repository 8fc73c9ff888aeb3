"""
Request signer: HMAC-SHA256 over the canonical request.

Canonical message (UTF-8), newline separated:
    METHOD
    URL (absolute, including query string)
    PARAMS (body text, or "{}" when there is no body)
    API_TOKEN
    NONCE (integer Unix timestamp)

The base64 digest travels in X-Tokenly-Auth-Signature next to the token and
nonce headers. Signing must be the last step before dispatch.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time

from xchain_client.core.exceptions import SigningError
from xchain_client.core.models import RequestDescriptor, SignedRequest

HEADER_API_TOKEN = "X-Tokenly-Auth-Api-Token"
HEADER_NONCE = "X-Tokenly-Auth-Nonce"
HEADER_SIGNATURE = "X-Tokenly-Auth-Signature"

EMPTY_PARAMS = "{}"


def current_nonce() -> int:
    return int(time.time())


def canonical_message(descriptor: RequestDescriptor, api_token: str, nonce: int) -> bytes:
    """Build the exact bytes that get MAC'd."""
    if descriptor.body:
        try:
            params = descriptor.body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SigningError(f"Request body is not valid UTF-8: {e}") from e
    else:
        params = EMPTY_PARAMS
    return "\n".join(
        [descriptor.method, descriptor.url, params, api_token, str(int(nonce))]
    ).encode("utf-8")


def compute_signature(message: bytes, api_secret_key: str) -> str:
    digest = hmac.new(api_secret_key.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(
    descriptor: RequestDescriptor,
    api_token: str,
    api_secret_key: str,
    *,
    nonce: int | None = None,
) -> SignedRequest:
    """
    Sign a descriptor and return it with the auth headers added.

    Args:
        descriptor: Unsigned request from build_request().
        api_token: Public token; tells the server which secret to verify with.
        api_secret_key: Shared secret, used only as the HMAC key.
        nonce: Unix timestamp to sign with. Defaults to now; tests inject it.

    Raises:
        SigningError: empty credentials or a non-UTF-8 body.
    """
    if not api_token:
        raise SigningError("api_token must be non-empty")
    if not api_secret_key:
        raise SigningError("api_secret_key must be non-empty")

    nonce = current_nonce() if nonce is None else int(nonce)
    message = canonical_message(descriptor, api_token, nonce)
    signature = compute_signature(message, api_secret_key)

    signed = descriptor.with_headers(
        {
            HEADER_API_TOKEN: api_token,
            HEADER_NONCE: str(nonce),
            HEADER_SIGNATURE: signature,
        }
    )
    return SignedRequest(descriptor=signed, nonce=nonce)
