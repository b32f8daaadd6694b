"""SMTP worker process.

Starts an aiosmtpd server with AnymailSMTPHandler for receiving
verification emails. The SMTP server, the handler's background writes and
the code store share one event loop; on shutdown, outstanding code writes
are drained before the code store is closed.

Environment Variables:
    SMTP_HOST: Bind address (default: 0.0.0.0)
    SMTP_PORT: Listen port (default: 2525)
    SMTP_DOMAIN: Server hostname (default: anymail.local)
    SMTP_MAX_SIZE: Max email size in bytes (default: 26214400 = 25MB)
    CODE_TTL_SECONDS: Code lifetime in seconds (default: 600)
    CODE_STORE_BACKEND / REDIS_URL: Code store
"""

import asyncio
import logging
import signal
from typing import Optional

from aiosmtpd.smtp import SMTP

from ..config import Settings, get_settings
from ..infrastructure.ingest.smtp_handler import AnymailSMTPHandler
from ..infrastructure.kv.store_factory import build_code_store
from ..ingest.completion_tracker import CompletionTracker
from ..observability.logging_config import configure_logging
from ..observability.metrics import start_metrics_server

logger = logging.getLogger(__name__)


async def serve(settings: Settings, stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the SMTP listener until ``stop_event`` is set."""
    stop_event = stop_event or asyncio.Event()
    code_store = build_code_store(settings)
    tracker = CompletionTracker()
    handler = AnymailSMTPHandler(settings, code_store, tracker)

    logger.info("=== Anymail Codes SMTP Server Starting ===")
    logger.info(f"SMTP Bind: {settings.SMTP_HOST}:{settings.SMTP_PORT}")
    logger.info(f"SMTP Domain: {settings.SMTP_DOMAIN}")
    logger.info(f"Max Message Size: {settings.SMTP_MAX_SIZE} bytes")
    logger.info(f"Code TTL: {settings.code_ttl_seconds}s")

    loop = asyncio.get_running_loop()
    server = await loop.create_server(
        lambda: SMTP(
            handler,
            hostname=settings.SMTP_DOMAIN,
            data_size_limit=settings.SMTP_MAX_SIZE,
            # Enable SMTPUTF8 for international email addresses
            enable_SMTPUTF8=True,
        ),
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
    )
    logger.info(f"SMTP server started on {settings.SMTP_HOST}:{settings.SMTP_PORT}")

    try:
        await stop_event.wait()
    finally:
        logger.info("Shutting down SMTP server...")
        server.close()
        await server.wait_closed()
        if tracker.pending:
            logger.info(f"Waiting for {tracker.pending} pending code write batch(es)")
        await tracker.drain()
        await code_store.close()
        logger.info("SMTP server stopped")


async def _main() -> None:
    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
    start_metrics_server(settings.METRICS_PORT)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:  # pragma: no cover - Windows
            pass

    await serve(settings, stop_event)


def main() -> None:
    asyncio.run(_main())


if __name__ == '__main__':
    main()
