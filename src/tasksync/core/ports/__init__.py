"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .config_provider import AppConfig, ConfigProviderPort, RemoteConfig, SyncConfig
from .credentials import CredentialProviderPort
from .local_store import LocalStorePort

__all__ = [
    "AppConfig",
    "ConfigProviderPort",
    "RemoteConfig",
    "SyncConfig",
    "CredentialProviderPort",
    "LocalStorePort",
]
