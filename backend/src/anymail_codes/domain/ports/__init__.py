"""Port interfaces implemented by infrastructure adapters."""

from .code_store_port import CodeStoreError, CodeStorePort

__all__ = ["CodeStoreError", "CodeStorePort"]
