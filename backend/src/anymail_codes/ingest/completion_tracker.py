"""Completion tracking for background work.

Lets a transport acknowledge a message right away while the writes it
triggered keep running. The owner drains the tracker before shutdown.
"""

import asyncio
import logging
from typing import Awaitable, Set

logger = logging.getLogger(__name__)


class CompletionTracker:
    """Keeps scheduled tasks alive until they finish."""

    def __init__(self):
        self._pending: Set[asyncio.Future] = set()

    @property
    def pending(self) -> int:
        """Number of scheduled tasks not yet finished."""
        return len(self._pending)

    def wait_until(self, work: Awaitable) -> asyncio.Future:
        """Schedule ``work`` on the running loop and track it.

        Args:
            work: Coroutine or future to run to completion

        Returns:
            asyncio.Future: The tracked task
        """
        task = asyncio.ensure_future(work)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every tracked task; failures are logged, not raised."""
        while self._pending:
            results = await asyncio.gather(*list(self._pending), return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException) and not isinstance(result, asyncio.CancelledError):
                    logger.warning(f"Background task failed: {result}")
