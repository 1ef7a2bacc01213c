"""
Local Store Adapters - Implementations of LocalStorePort.
"""

from .memory import InMemoryLocalStore

__all__ = ["InMemoryLocalStore"]
