"""
HTTP pipeline for the XChain API.

Request builder, HMAC signer, dispatcher and response interpreter, wired
together by pipeline.execute().
"""

from xchain_client.transport.dispatcher import send_request
from xchain_client.transport.interpreter import interpret
from xchain_client.transport.pipeline import execute
from xchain_client.transport.request_builder import build_request, encode_query
from xchain_client.transport.signer import sign_request

__all__ = [
    "build_request",
    "encode_query",
    "execute",
    "interpret",
    "send_request",
    "sign_request",
]
