"""Unit tests for the aiosmtpd handler

Tests use real aiosmtpd Envelope objects and a mocked code store.
"""

from unittest.mock import AsyncMock, patch

import pytest
from aiosmtpd.smtp import Envelope

from anymail_codes.infrastructure.ingest.header_parser import parse_headers
from anymail_codes.infrastructure.ingest.smtp_handler import AnymailSMTPHandler
from anymail_codes.ingest.completion_tracker import CompletionTracker


RAW_MESSAGE = (
    b"From: no-reply@service.example\r\n"
    b"To: User <user@test.com>\r\n"
    b"Subject: Code\r\n"
    b"\r\n"
    b"Use 73920 to verify\r\n"
)


def make_envelope(rcpt_tos, content=RAW_MESSAGE):
    envelope = Envelope()
    envelope.mail_from = "no-reply@service.example"
    envelope.rcpt_tos = list(rcpt_tos)
    envelope.content = content
    envelope.original_content = content
    return envelope


@pytest.fixture
def code_store():
    return AsyncMock()


@pytest.fixture
def tracker():
    return CompletionTracker()


@pytest.fixture
def handler(make_settings, code_store, tracker):
    return AnymailSMTPHandler(make_settings(CODE_TTL_SECONDS="120"), code_store, tracker)


class TestAnymailSMTPHandler:
    """Test DATA handling"""

    @pytest.mark.asyncio
    async def test_stores_code_for_envelope_recipients(self, handler, code_store, tracker):
        response = await handler.handle_DATA(None, None, make_envelope(["User@Test.com"]))
        await tracker.drain()

        assert response == "250 Message accepted"
        code_store.put.assert_awaited_once_with("code:user@test.com", "73920", 120)

    @pytest.mark.asyncio
    async def test_message_without_code_is_accepted(self, handler, code_store, tracker):
        content = b"Subject: Hello\r\n\r\nNo digits here\r\n"

        response = await handler.handle_DATA(None, None, make_envelope(["user@test.com"], content))
        await tracker.drain()

        assert response == "250 Message accepted"
        code_store.put.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_is_not_reported_to_sender(self, handler, code_store, tracker):
        code_store.put.side_effect = RuntimeError("store down")

        response = await handler.handle_DATA(None, None, make_envelope(["user@test.com"]))
        await tracker.drain()

        assert response == "250 Message accepted"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_still_acknowledged(self, handler):
        with patch(
            "anymail_codes.infrastructure.ingest.smtp_handler.handle_inbound_email",
            side_effect=RuntimeError("boom"),
        ):
            response = await handler.handle_DATA(None, None, make_envelope(["user@test.com"]))

        assert response == "250 Message accepted"

    @pytest.mark.asyncio
    async def test_encoded_subject_is_scanned_as_sent(self, handler, code_store, tracker):
        """Encoded-words are not decoded, so their digits are not word-bounded"""
        content = (
            b"To: user@test.com\r\n"
            b"Subject: =?utf-8?q?Code_48291?=\r\n"
            b"\r\n"
            b"Use 55555 to verify\r\n"
        )

        await handler.handle_DATA(None, None, make_envelope(["user@test.com"], content))
        await tracker.drain()

        code_store.put.assert_awaited_once_with("code:user@test.com", "55555", 120)

    def test_build_message(self, handler):
        message = handler.build_message(make_envelope(["a@x.com", "b@y.com"]))

        assert message.to == ["a@x.com", "b@y.com"]
        assert message.subject == "Code"
        assert message.raw.read() == RAW_MESSAGE


class TestParseHeaders:
    """Test header block parsing"""

    def test_subject_and_message_id(self):
        headers = parse_headers(b"Subject: Hi\r\nMessage-ID: <abc@x>\r\n\r\nbody")

        assert headers.subject == "Hi"
        assert headers.message_id == "<abc@x>"

    def test_encoded_subject_is_kept_raw(self):
        headers = parse_headers(b"Subject: =?utf-8?q?C=C3=B3digo_48291?=\r\n\r\n")

        assert headers.subject == "=?utf-8?q?C=C3=B3digo_48291?="

    def test_missing_headers(self):
        headers = parse_headers(b"\r\nbody only")

        assert headers.subject is None
        assert headers.message_id is None
