"""
Environment variable loading and validation for the XChain client.

- XCHAIN_URL: service base URL, e.g. https://xchain.example.com (required by from_env)
- XCHAIN_API_TOKEN: API token identifying the key pair
- XCHAIN_API_SECRET_KEY: shared secret used to sign requests
- XCHAIN_REQUEST_TIMEOUT_SEC: optional transport timeout; unset = requests default (no timeout)
- Loads .env from the current working directory when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

ENV_FILENAME = ".env"


def load_xchain_env(env_path: Path | None = None) -> None:
    """Load .env (existing process env wins). Safe to call multiple times."""
    load_dotenv(env_path or Path.cwd() / ENV_FILENAME, override=False)


def _required(name: str) -> str:
    load_xchain_env()
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ValueError(f"{name} must be set (environment or .env)")
    return value


def get_xchain_url() -> str:
    """Return XCHAIN_URL without trailing slash."""
    return _required("XCHAIN_URL").rstrip("/")


def get_api_token() -> str:
    return _required("XCHAIN_API_TOKEN")


def get_api_secret_key() -> str:
    return _required("XCHAIN_API_SECRET_KEY")


def get_request_timeout() -> float | None:
    """
    Return XCHAIN_REQUEST_TIMEOUT_SEC as a positive float, or None when unset.
    """
    load_xchain_env()
    raw = (os.getenv("XCHAIN_REQUEST_TIMEOUT_SEC") or "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"XCHAIN_REQUEST_TIMEOUT_SEC must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError("XCHAIN_REQUEST_TIMEOUT_SEC must be positive")
    return timeout


def describe_xchain_env() -> dict[str, str]:
    """Resolved configuration for log fields, with token and secret masked."""
    load_xchain_env()
    token = (os.getenv("XCHAIN_API_TOKEN") or "").strip()
    timeout = (os.getenv("XCHAIN_REQUEST_TIMEOUT_SEC") or "").strip()
    return {
        "xchain_url": (os.getenv("XCHAIN_URL") or "").strip() or "<unset>",
        "api_token": token[:4] + "***" if token else "<unset>",
        "secret_key": "set" if (os.getenv("XCHAIN_API_SECRET_KEY") or "").strip() else "<unset>",
        "request_timeout_sec": timeout or "<default>",
    }
