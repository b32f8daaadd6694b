"""Anymail Codes - verification code relay.

Receives inbound email, extracts one-time passcodes per recipient, and
serves the most recent code for an address over an authenticated lookup API.
"""

__version__ = "0.1.0"
