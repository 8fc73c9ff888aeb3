"""
Test that xchain_logging can be imported without circular import and logger works.
"""

from __future__ import annotations

import pytest
import structlog


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


def test_logging_import():
    """Import get_logger from xchain_logging and use the logger."""
    from xchain_client.xchain_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_import_does_not_configure_structlog():
    """Importing the client leaves the host application's structlog setup alone."""
    import xchain_client  # noqa: F401

    assert not structlog.is_configured()


def test_bind_request_fields():
    from structlog.testing import capture_logs

    from xchain_client.xchain_logging import bind_request

    with capture_logs() as logs:
        bind_request("GET", "/feerates").warning("xchain_service_error", status_code=500)
    assert logs[0]["method"] == "GET"
    assert logs[0]["path"] == "/feerates"
    assert logs[0]["logger"] == "xchain_client"


def test_configure_structlog_json(restore_structlog, capsys):
    """Opt-in setup renders JSON lines with event_type and timestamp."""
    import json

    from xchain_client.xchain_logging import configure_structlog, get_logger

    configure_structlog(level="INFO", log_format="json")
    assert structlog.is_configured()
    get_logger("test").info("xchain_client_ready", key="value")
    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event_type"] == "xchain_client_ready"
    assert record["level"] == "info"
    assert record["logger"] == "test"
    assert "timestamp" in record
