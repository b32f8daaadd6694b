"""In-process code store with lazy expiry.

Suitable for a single process (development, tests). Records are dropped
when read after their deadline or on the next write.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from ...domain.ports.code_store_port import CodeStorePort


class MemoryCodeStore(CodeStorePort):
    """Dict-backed store; ``clock`` returns monotonic seconds."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._records: Dict[str, Tuple[str, float]] = {}

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        now = self._clock()
        self._purge(now)
        self._records[key] = (value, now + ttl_seconds)

    async def get(self, key: str) -> Optional[str]:
        record = self._records.get(key)
        if record is None:
            return None
        value, expires_at = record
        if self._clock() >= expires_at:
            self._records.pop(key, None)
            return None
        return value

    def __len__(self) -> int:
        self._purge(self._clock())
        return len(self._records)

    def _purge(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._records.items() if now >= expires_at]
        for key in expired:
            del self._records[key]
