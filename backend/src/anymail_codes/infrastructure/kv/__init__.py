"""Code store adapters."""

from .memory_code_store import MemoryCodeStore
from .redis_code_store import RedisCodeStore
from .store_factory import build_code_store

__all__ = ["MemoryCodeStore", "RedisCodeStore", "build_code_store"]
