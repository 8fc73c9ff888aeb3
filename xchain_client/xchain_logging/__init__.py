"""
Structured logging for the XChain client.

Use get_logger() / bind_request() in client modules; applications may call
configure_structlog() once if they have no structlog setup of their own.
"""

from xchain_client.xchain_logging.logger import bind_request, configure_structlog, get_logger

__all__ = ["bind_request", "configure_structlog", "get_logger"]
