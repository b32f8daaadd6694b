"""Prometheus metrics for Anymail Codes.

Defines operational counters for the ingest and lookup paths.
"""

import logging
from typing import Optional

from prometheus_client import Counter, start_http_server

logger = logging.getLogger(__name__)

# Ingest metrics
inbound_messages_total = Counter(
    "anymail_inbound_messages_total",
    "Total inbound messages handled",
    ["outcome"]  # outcome: no_recipients|no_code|accepted
)

code_writes_total = Counter(
    "anymail_code_writes_total",
    "Total per-recipient code writes",
    ["status"]  # status: success|error
)

# Lookup metrics
lookups_total = Counter(
    "anymail_lookups_total",
    "Total lookup API responses",
    ["status"]  # HTTP status code
)


def start_metrics_server(port: Optional[int]) -> bool:
    """Expose metrics on ``port`` in a background thread.

    Returns:
        bool: True if the exporter was started
    """
    if not port:
        return False
    start_http_server(port)
    logger.info(f"Prometheus metrics exposed on port {port}")
    return True
