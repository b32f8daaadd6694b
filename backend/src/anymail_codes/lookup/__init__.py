"""Authenticated code lookup API."""

from .router import router
from .routing import AddressLookupRoute, DomainListRoute, LookupRoute, parse_route

__all__ = [
    "router",
    "AddressLookupRoute",
    "DomainListRoute",
    "LookupRoute",
    "parse_route",
]
