"""Lookup route parsing.

The lookup API has exactly two routes: the bare root lists the allowed
domains, anything else is a (percent-encoded) email address.
"""

import re
from dataclasses import dataclass
from typing import Union
from urllib.parse import unquote

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class DomainListRoute:
    """``GET /``"""
    pass


@dataclass(frozen=True)
class AddressLookupRoute:
    """``GET /<urlencoded-email>``; ``token`` is still percent-encoded."""
    token: str


LookupRoute = Union[DomainListRoute, AddressLookupRoute]


def parse_route(path: str) -> LookupRoute:
    """Map a raw request path to its route.

    Examples:
        '/' -> DomainListRoute()
        '//user%40test.com' -> AddressLookupRoute('user%40test.com')
    """
    token = path.lstrip("/")
    if not token:
        return DomainListRoute()
    return AddressLookupRoute(token=token)


def decode_token(token: str) -> str:
    """Percent-decode a lookup token as UTF-8.

    A malformed escape (``%zz``, trailing ``%``) or bytes that are not
    UTF-8 yield an empty string, which no address matches.
    """
    if _MALFORMED_ESCAPE.search(token):
        return ""
    try:
        return unquote(token, encoding="utf-8", errors="strict")
    except UnicodeDecodeError:
        return ""
