"""Data models shared by the ingest and lookup paths."""

from .inbound_email import InboundEmail

__all__ = ["InboundEmail"]
