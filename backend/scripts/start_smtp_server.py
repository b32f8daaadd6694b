#!/usr/bin/env python3
"""SMTP Server Startup Script for Anymail Codes.

Starts the aiosmtpd listener that extracts verification codes from
inbound email and stores them per recipient.

Usage:
    python scripts/start_smtp_server.py

Configuration is read from the environment (see anymail_codes.config).
"""

import logging
import os
import sys

# Add backend/src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from anymail_codes.workers.smtp_server import main

logger = logging.getLogger(__name__)


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, exiting")
        sys.exit(0)
    except Exception as e:
        logger.error(f"SMTP server failed: {e}", exc_info=True)
        sys.exit(1)
