"""Recipient and verification code extraction.

Pure helpers that turn raw message fields into normalized recipient
addresses and a 5-6 digit verification code, plus the storage key and
domain list helpers shared by the inbound and lookup paths.
"""

import inspect
import logging
import re
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}",
    re.IGNORECASE | re.ASCII,
)

# ASCII word boundaries: "x12345" or "123456789" never yield a code
CODE_PATTERN = re.compile(r"\b(\d{5,6})\b", re.ASCII)

KEY_PREFIX = "code:"


def extract_email_address(value: Any) -> Optional[str]:
    """Return the first email address found in ``value``, lower-cased.

    Examples:
        'John <John@Example.COM>' -> 'john@example.com'
        'undisclosed-recipients' -> None

    Args:
        value: Raw header or envelope value

    Returns:
        Optional[str]: Normalized address or None when nothing matches
    """
    if not value or not isinstance(value, str):
        return None
    match = EMAIL_PATTERN.search(value)
    return match.group(0).lower() if match else None


def _as_entries(to: Any) -> Iterable[Any]:
    if to is None or isinstance(to, (str, bytes)):
        return [to]
    try:
        return list(to)
    except TypeError:
        logger.debug("Unusable recipient field of type %s", type(to).__name__)
        return []


def get_recipients(message: Any) -> List[str]:
    """Collect unique normalized recipients from ``message.to``.

    ``to`` may be a single string or a sequence of strings. Order of first
    appearance is kept and duplicates (after normalization) are dropped.
    """
    recipients: List[str] = []
    for entry in _as_entries(getattr(message, "to", None)):
        email = extract_email_address(entry)
        if email and email not in recipients:
            recipients.append(email)
    return recipients


def extract_code(text: str) -> Optional[str]:
    """Return the first standalone 5 or 6 digit token in ``text``."""
    match = CODE_PATTERN.search(text or "")
    return match.group(1) if match else None


async def read_raw_text(message: Any) -> str:
    """Consume the message body stream once and return it as text.

    The stream may expose a sync or async ``read()``. Bytes are decoded as
    UTF-8 with replacement characters. A missing stream or any read failure
    yields an empty string.
    """
    stream = getattr(message, "raw", None)
    if stream is None:
        return ""
    try:
        data = stream.read()
        if inspect.isawaitable(data):
            data = await data
    except Exception as e:
        logger.warning(f"Failed to read message body: {e}")
        return ""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8", errors="replace")
    return data or ""


def build_key(email: str) -> str:
    """Storage key for a recipient's code."""
    return f"{KEY_PREFIX}{email}"


def parse_domains(value: Optional[str]) -> List[str]:
    if not value:
        return []
    domains = (domain.strip().lower() for domain in value.split(","))
    return [domain for domain in domains if domain]
