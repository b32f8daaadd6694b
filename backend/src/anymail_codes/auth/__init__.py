"""Shared-secret authorization for the lookup API."""

from .access_key import get_access_key, is_authorized

__all__ = ["get_access_key", "is_authorized"]
