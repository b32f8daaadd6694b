"""Header parsing for inbound email.

Only the header block is parsed; bodies are never MIME-decoded. Header
values are handed on as sent: RFC 2047 encoded-words are not decoded.
"""

import email.policy
import logging
from email.parser import BytesHeaderParser
from typing import Optional

logger = logging.getLogger(__name__)


class EmailHeaders:
    """Headers needed to process an inbound message."""

    def __init__(
        self,
        subject: Optional[str],
        message_id: Optional[str],
    ):
        self.subject = subject
        self.message_id = message_id


def parse_headers(raw_mime: bytes) -> EmailHeaders:
    """Parse the header block of a raw message.

    Malformed headers never raise; missing values come back as None.

    Args:
        raw_mime: Raw message bytes (headers and body)

    Returns:
        EmailHeaders: Subject and Message-ID
    """
    try:
        msg = BytesHeaderParser(policy=email.policy.compat32).parsebytes(raw_mime)
        subject = msg.get("Subject")
        message_id = msg.get("Message-ID")
    except Exception as e:
        logger.warning(f"Failed to parse message headers: {e}")
        return EmailHeaders(subject=None, message_id=None)

    return EmailHeaders(
        subject=str(subject) if subject is not None else None,
        message_id=str(message_id) if message_id is not None else None,
    )
