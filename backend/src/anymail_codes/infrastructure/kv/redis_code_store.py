"""Redis adapter for the code store.

Uses SET with EX so that Redis expires records on its own.
"""

import logging
from typing import Optional

from redis import RedisError
from redis.asyncio import Redis

from ...domain.ports.code_store_port import CodeStoreError, CodeStorePort

logger = logging.getLogger(__name__)


class RedisCodeStore(CodeStorePort):
    """Code store backed by ``redis.asyncio``."""

    def __init__(self, client: Redis):
        """Initialize store.

        Args:
            client: Redis client created with ``decode_responses=True``
        """
        self.redis = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCodeStore":
        return cls(Redis.from_url(url, decode_responses=True))

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        try:
            await self.redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.error(f"Redis write failed: key={key}: {e}")
            raise CodeStoreError(f"Failed to store {key}: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.redis.get(key)
        except RedisError as e:
            logger.error(f"Redis read failed: key={key}: {e}")
            raise CodeStoreError(f"Failed to read {key}: {e}") from e

    async def close(self) -> None:
        await self.redis.aclose()
