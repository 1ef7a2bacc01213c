"""
Config Provider Port - Abstract interface for configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RemoteConfig:
    """Configuration of the remote task service session."""

    account_name: str = ""
    base_url: str = "https://mail.google.com/tasks/"
    connect_timeout: float = 10.0
    read_timeout: float = 15.0
    session_ttl: float = 300.0
    consumer_domains: tuple[str, ...] = ("gmail.com", "googlemail.com")


@dataclass
class SyncConfig:
    """Configuration of a sync pass."""

    max_pending_updates: int = 10
    verbose: bool = False


@dataclass
class AppConfig:
    """Complete configuration."""

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    env_file: Optional[str] = None


class ConfigProviderPort(ABC):
    """Abstract interface for configuration providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        ...
