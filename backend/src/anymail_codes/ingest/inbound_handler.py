"""Inbound email handler.

Turns a received message into one code record per recipient:

1. Normalize recipients (none => discard)
2. Extract the first 5-6 digit code from subject + raw message (none => discard)
3. Resolve the TTL from settings
4. Schedule one store write per recipient on the completion tracker

Writes are best effort: failures are logged and counted, never raised,
and the caller is not blocked on them.
"""

import asyncio
import logging

from ..codes.extractor import build_key, extract_code, get_recipients, read_raw_text
from ..config import Settings
from ..domain.ports.code_store_port import CodeStorePort
from ..models.inbound_email import InboundEmail
from ..observability.metrics import code_writes_total, inbound_messages_total
from .completion_tracker import CompletionTracker

logger = logging.getLogger(__name__)


async def _store_code(
    code_store: CodeStorePort,
    recipient: str,
    code: str,
    ttl_seconds: int,
) -> None:
    try:
        await code_store.put(build_key(recipient), code, ttl_seconds)
    except Exception as e:
        code_writes_total.labels(status="error").inc()
        logger.warning(
            f"Failed to store code for {recipient}: {e}",
            extra={"recipient": recipient},
        )
        return
    code_writes_total.labels(status="success").inc()
    logger.info(
        f"Stored code for {recipient} (ttl={ttl_seconds}s)",
        extra={"recipient": recipient},
    )


async def handle_inbound_email(
    message: InboundEmail,
    settings: Settings,
    code_store: CodeStorePort,
    tracker: CompletionTracker,
) -> None:
    """Extract a code from ``message`` and schedule its storage.

    Args:
        message: Received message (body stream is consumed)
        settings: Application settings (TTL)
        code_store: Destination store
        tracker: Completion tracker that owns the scheduled writes
    """
    recipients = get_recipients(message)
    if not recipients:
        inbound_messages_total.labels(outcome="no_recipients").inc()
        logger.debug("Discarding message without usable recipients")
        return

    subject = message.subject or ""
    raw_text = await read_raw_text(message)
    code = extract_code(f"{subject}\n{raw_text}")
    if not code:
        inbound_messages_total.labels(outcome="no_code").inc()
        logger.info(
            f"No verification code in message for {len(recipients)} recipient(s)",
            extra={"message_id": message.message_id},
        )
        return

    ttl_seconds = settings.code_ttl_seconds
    inbound_messages_total.labels(outcome="accepted").inc()
    writes = [
        _store_code(code_store, recipient, code, ttl_seconds)
        for recipient in recipients
    ]
    tracker.wait_until(asyncio.gather(*writes))
