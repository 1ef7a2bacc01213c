"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (TASKSYNC_ACCOUNT, TASKSYNC_BASE_URL, ...)
- .env files
- Explicit overrides from the embedding application
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    AppConfig,
    ConfigProviderPort,
    RemoteConfig,
    SyncConfig,
)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.
    """

    ENV_PREFIX = "TASKSYNC_"

    NUMERIC_KEYS = {
        "connect_timeout": float,
        "read_timeout": float,
        "session_ttl": float,
        "max_pending_updates": int,
    }

    def __init__(
        self,
        env_file: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            overrides: Values taking precedence over everything else
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._overrides = {
            self._normalize(k): v for k, v in (overrides or {}).items() if v is not None
        }

        # Load configuration
        self._load_env_file()
        self._load_environment()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        defaults = RemoteConfig()
        remote = RemoteConfig(
            account_name=self.get("account", ""),
            base_url=self.get("base_url", defaults.base_url),
            connect_timeout=self._number("connect_timeout", defaults.connect_timeout),
            read_timeout=self._number("read_timeout", defaults.read_timeout),
            session_ttl=self._number("session_ttl", defaults.session_ttl),
        )

        sync = SyncConfig(
            max_pending_updates=self._number(
                "max_pending_updates", SyncConfig().max_pending_updates
            ),
            verbose=self._flag(self.get("verbose", False)),
        )

        env_file = self._find_env_file()
        return AppConfig(
            remote=remote,
            sync=sync,
            env_file=str(env_file) if env_file else None,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = self._normalize(key)

        # Check overrides first
        if key in self._overrides:
            return self._overrides[key]

        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        self._values[self._normalize(key)] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        if not self.get("account"):
            errors.append("Missing TASKSYNC_ACCOUNT - set in environment or .env file")

        for key, kind in self.NUMERIC_KEYS.items():
            value = self.get(key)
            if value is None:
                continue
            try:
                number = kind(value)
            except (TypeError, ValueError):
                errors.append(f"Invalid {self.ENV_PREFIX}{key.upper()}: {value!r}")
                continue
            if number <= 0:
                errors.append(f"{self.ENV_PREFIX}{key.upper()} must be positive")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _normalize(self, key: str) -> str:
        key = key.lower().replace("-", "_")
        prefix = self.ENV_PREFIX.lower()
        if key.startswith(prefix):
            key = key[len(prefix):]
        return key

    def _number(self, key: str, default: Any) -> Any:
        value = self.get(key)
        if value is None:
            return default
        try:
            return self.NUMERIC_KEYS[key](value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _flag(value: Any) -> bool:
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            if not key.upper().startswith(self.ENV_PREFIX):
                continue

            value = value.strip().strip('"').strip("'")
            self._values[self._normalize(key)] = value

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file and self._env_file.exists():
            return self._env_file

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, raw_value in os.environ.items():
            if env_key.startswith(self.ENV_PREFIX):
                self._values[self._normalize(env_key)] = raw_value
