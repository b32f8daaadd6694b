"""Inbound email handling: code extraction and per-recipient storage."""

from .completion_tracker import CompletionTracker
from .inbound_handler import handle_inbound_email

__all__ = ["CompletionTracker", "handle_inbound_email"]
