"""
Configuration for the XChain client (environment variables and .env).
"""

from xchain_client.config.env import (
    describe_xchain_env,
    get_api_secret_key,
    get_api_token,
    get_request_timeout,
    get_xchain_url,
    load_xchain_env,
)

__all__ = [
    "describe_xchain_env",
    "get_api_secret_key",
    "get_api_token",
    "get_request_timeout",
    "get_xchain_url",
    "load_xchain_env",
]
