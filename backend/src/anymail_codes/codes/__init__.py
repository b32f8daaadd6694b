"""Address normalization and verification code extraction."""

from .extractor import (
    build_key,
    extract_code,
    extract_email_address,
    get_recipients,
    parse_domains,
    read_raw_text,
)

__all__ = [
    "build_key",
    "extract_code",
    "extract_email_address",
    "get_recipients",
    "parse_domains",
    "read_raw_text",
]
