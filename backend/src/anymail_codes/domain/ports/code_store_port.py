"""Code Store Port - Domain interface for the TTL key-value store.

Adapters must implement this interface to provide Redis or other
key-value backends. Expiry is enforced by the store, not by callers.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import Optional


class CodeStoreError(Exception):
    """Raised when the backing store fails (connection, protocol, etc.)."""
    pass


class CodeStorePort(ABC):
    """Port interface for short-lived verification code records.

    Example Usage:
        store = RedisCodeStore.from_url("redis://localhost:6379/0")

        await store.put("code:user@test.com", "73920", ttl_seconds=120)
        code = await store.get("code:user@test.com")  # "73920" until expiry
    """

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: Opaque record key
            value: Record value
            ttl_seconds: Lifetime in seconds (must be > 0)

        Raises:
            CodeStoreError: If the write fails
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the unexpired value stored under ``key``.

        Args:
            key: Opaque record key

        Returns:
            Optional[str]: Value, or None if absent or expired

        Raises:
            CodeStoreError: If the read fails
        """
        pass

    async def close(self) -> None:
        """Release backend resources. Default: nothing to release."""
        return None
