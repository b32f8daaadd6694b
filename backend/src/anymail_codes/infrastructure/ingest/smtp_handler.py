"""SMTP Handler for inbound verification emails.

Implements an aiosmtpd handler that hands every accepted message to the
inbound email handler. The message is acknowledged as soon as its code
writes are scheduled; the writes themselves run on the completion tracker.

Architecture: Hexagonal - Infrastructure adapter implementing email ingestion
"""

import logging
from io import BytesIO

from aiosmtpd.smtp import Envelope, Session, SMTP

from ...config import Settings
from ...domain.ports.code_store_port import CodeStorePort
from ...ingest.completion_tracker import CompletionTracker
from ...ingest.inbound_handler import handle_inbound_email
from ...models.inbound_email import InboundEmail
from ...observability.request_id import generate_request_id, set_request_id
from .header_parser import parse_headers

logger = logging.getLogger(__name__)

ACCEPTED = '250 Message accepted'


class AnymailSMTPHandler:
    """SMTP handler feeding the verification code store.

    Email processing:
    1. Parse Subject and Message-ID from the header block
    2. Wrap the raw message (headers + body) as a one-shot body stream
    3. Call the inbound handler with the envelope recipients

    Every message is answered with 250: messages without a monitored
    recipient or without a code are dropped silently, and store failures
    are never reported to the sender.
    """

    def __init__(
        self,
        settings: Settings,
        code_store: CodeStorePort,
        tracker: CompletionTracker,
    ):
        """Initialize SMTP handler.

        Args:
            settings: Application settings
            code_store: Destination code store
            tracker: Owner of the background code writes
        """
        self.settings = settings
        self.code_store = code_store
        self.tracker = tracker

    def build_message(self, envelope: Envelope) -> InboundEmail:
        """Build the inbound message view for an SMTP envelope."""
        raw_mime = envelope.original_content or envelope.content or b""
        if isinstance(raw_mime, str):
            raw_mime = raw_mime.encode("utf-8", errors="replace")
        headers = parse_headers(raw_mime)
        return InboundEmail(
            to=list(envelope.rcpt_tos),
            subject=headers.subject,
            raw=BytesIO(raw_mime),
            message_id=headers.message_id,
        )

    async def handle_DATA(
        self,
        server: SMTP,
        session: Session,
        envelope: Envelope,
    ) -> str:
        """Handle email DATA command (main SMTP handler entry point).

        Args:
            server: SMTP server instance
            session: SMTP session
            envelope: Email envelope (content, sender, recipients)

        Returns:
            str: SMTP response, always '250 Message accepted'
        """
        set_request_id(generate_request_id())
        try:
            message = self.build_message(envelope)
            logger.info(
                f"Received email: from={envelope.mail_from}, "
                f"recipients={len(envelope.rcpt_tos)}",
                extra={"message_id": message.message_id},
            )
            await handle_inbound_email(
                message,
                self.settings,
                self.code_store,
                self.tracker,
            )
        except Exception as e:
            logger.error(f"Unexpected error processing email: {e}", exc_info=True)

        return ACCEPTED
