"""Select the code store implementation from settings."""

import logging

from ...config import Settings
from ...domain.ports.code_store_port import CodeStorePort
from .memory_code_store import MemoryCodeStore
from .redis_code_store import RedisCodeStore

logger = logging.getLogger(__name__)


def build_code_store(settings: Settings) -> CodeStorePort:
    """Create the store named by ``CODE_STORE_BACKEND``.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.CODE_STORE_BACKEND.strip().lower()
    if backend == "redis":
        # Hide credentials
        logger.info(f"Using Redis code store at {settings.REDIS_URL.split('@')[-1]}")
        return RedisCodeStore.from_url(settings.REDIS_URL)
    if backend == "memory":
        logger.warning("Using in-memory code store; codes are not shared between processes")
        return MemoryCodeStore()
    raise ValueError(f"Unknown CODE_STORE_BACKEND: {settings.CODE_STORE_BACKEND}")
