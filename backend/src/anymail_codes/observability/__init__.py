"""Observability module for Anymail Codes.

Provides structured logging, request correlation, and metrics.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    code_writes_total,
    inbound_messages_total,
    lookups_total,
    start_metrics_server,
)
from .request_id import request_id_var, get_request_id, set_request_id, generate_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "code_writes_total",
    "inbound_messages_total",
    "lookups_total",
    "start_metrics_server",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Middleware
    "RequestIDMiddleware",
]
