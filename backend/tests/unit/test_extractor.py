"""Unit tests for recipient and code extraction

Tests cover:
- Email address normalization and idempotence
- Recipient list building (single, list, duplicates, junk)
- Code extraction at 4/5/6/7 digit boundaries
- Body stream reading and failure handling
- Storage key and domain list helpers
"""

import io
from unittest.mock import AsyncMock, Mock

import pytest

from anymail_codes.codes.extractor import (
    build_key,
    extract_code,
    extract_email_address,
    get_recipients,
    parse_domains,
    read_raw_text,
)
from anymail_codes.models.inbound_email import InboundEmail


class TestExtractEmailAddress:
    """Test address normalization"""

    def test_lowercases_address(self):
        assert extract_email_address("John@Example.COM") == "john@example.com"

    def test_extracts_from_display_name(self):
        assert extract_email_address('"Jane Doe" <Jane.Doe+otp@Mail.Example.io>') == "jane.doe+otp@mail.example.io"

    def test_returns_first_match(self):
        assert extract_email_address("a@x.com, b@y.com") == "a@x.com"

    @pytest.mark.parametrize("value", [None, "", "undisclosed-recipients", "user@localhost", "@example.com"])
    def test_no_match(self, value):
        assert extract_email_address(value) is None

    def test_non_string_input(self):
        assert extract_email_address(42) is None
        assert extract_email_address(b"user@test.com") is None

    @pytest.mark.parametrize("value", [
        "John@Example.COM",
        "<USER@TEST.COM>",
        "x@y.com",
        "no address here",
    ])
    def test_idempotent(self, value):
        once = extract_email_address(value)
        assert extract_email_address(once) == once


class TestGetRecipients:
    """Test recipient list building"""

    def test_deduplicates_preserving_order(self):
        message = InboundEmail(to=["a@x.com", "A@X.COM", "b@y.com"])
        assert get_recipients(message) == ["a@x.com", "b@y.com"]

    def test_single_string(self):
        assert get_recipients(InboundEmail(to="User <User@Test.com>")) == ["user@test.com"]

    def test_missing_to(self):
        assert get_recipients(InboundEmail(to=None)) == []

    def test_skips_empty_and_invalid_entries(self):
        message = InboundEmail(to=["", None, "not-an-address", "c@z.org"])
        assert get_recipients(message) == ["c@z.org"]

    def test_malformed_to_field(self):
        assert get_recipients(InboundEmail(to=12345)) == []

    def test_object_without_to(self):
        assert get_recipients(object()) == []


class TestExtractCode:
    """Test 5-6 digit code extraction"""

    def test_code_in_sentence(self):
        assert extract_code("Your code is 482913, expires soon") == "482913"

    def test_long_digit_run_is_not_a_code(self):
        assert extract_code("order #12345678 confirmed") is None

    @pytest.mark.parametrize("text,expected", [
        ("code 1234 here", None),
        ("code 12345 here", "12345"),
        ("code 123456 here", "123456"),
        ("code 1234567 here", None),
    ])
    def test_digit_run_boundaries(self, text, expected):
        assert extract_code(text) == expected

    def test_first_match_wins(self):
        assert extract_code("11111 and then 222222") == "11111"

    def test_skips_long_run_before_code(self):
        assert extract_code("ref 9876543210, code 55555") == "55555"

    def test_keeps_leading_zeros(self):
        assert extract_code("Use 007351 to sign in") == "007351"

    @pytest.mark.parametrize("text", ["abc12345", "12345abc", "_12345", "12345_"])
    def test_requires_word_boundaries(self, text):
        assert extract_code(text) is None

    def test_punctuation_is_a_boundary(self):
        assert extract_code("code:12345.") == "12345"

    def test_non_ascii_digits_ignored(self):
        assert extract_code("١٢٣٤٥") is None

    def test_empty_text(self):
        assert extract_code("") is None


class TestReadRawText:
    """Test body stream consumption"""

    @pytest.mark.asyncio
    async def test_reads_bytes_stream(self):
        message = InboundEmail(to="a@x.com", raw=io.BytesIO(b"Use 73920 to verify"))
        assert await read_raw_text(message) == "Use 73920 to verify"

    @pytest.mark.asyncio
    async def test_reads_async_stream_once(self):
        stream = Mock()
        stream.read = AsyncMock(return_value=b"hello")
        message = InboundEmail(to="a@x.com", raw=stream)

        assert await read_raw_text(message) == "hello"
        stream.read.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_stream(self):
        assert await read_raw_text(InboundEmail(to="a@x.com")) == ""

    @pytest.mark.asyncio
    async def test_read_failure_yields_empty_text(self):
        stream = Mock()
        stream.read = Mock(side_effect=OSError("connection reset"))
        message = InboundEmail(to="a@x.com", raw=stream)

        assert await read_raw_text(message) == ""
        stream.read.assert_called_once()

    @pytest.mark.asyncio
    async def test_invalid_utf8_is_replaced(self):
        message = InboundEmail(to="a@x.com", raw=io.BytesIO(b"code \xff 12345"))
        assert await read_raw_text(message) == "code � 12345"


class TestKeysAndDomains:
    """Test storage key and domain list helpers"""

    def test_build_key(self):
        assert build_key("user@test.com") == "code:user@test.com"

    def test_parse_domains(self):
        assert parse_domains(" Test.com, ,example.ORG ,,") == ["test.com", "example.org"]

    @pytest.mark.parametrize("value", [None, "", " , ,"])
    def test_parse_domains_empty(self, value):
        assert parse_domains(value) == []
