"""SMTP transport adapter for inbound email."""

from .smtp_handler import AnymailSMTPHandler

__all__ = ["AnymailSMTPHandler"]
