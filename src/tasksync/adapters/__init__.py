"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Remote service: GTasks client and setup payload parsing
- Config: Environment variables and .env files
- Credentials: Environment bearer token
- Local store: In-memory reference store
"""

from .gtasks import GTasksClient
from .config import EnvironmentConfigProvider
from .credentials import EnvironmentCredentialProvider
from .local import InMemoryLocalStore

__all__ = [
    "GTasksClient",
    "EnvironmentConfigProvider",
    "EnvironmentCredentialProvider",
    "InMemoryLocalStore",
]
