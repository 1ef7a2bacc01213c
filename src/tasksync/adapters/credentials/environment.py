"""
Environment Credential Provider - Bearer token from the environment.

Useful for headless runs where the token is minted by another tool and
handed over through TASKSYNC_AUTH_TOKEN (or a per-account variable).
"""

import logging
import os
from typing import Optional

from ...core.exceptions import CredentialError
from ...core.ports.credentials import CredentialProviderPort


class EnvironmentCredentialProvider(CredentialProviderPort):
    """
    Reads bearer tokens from environment variables.

    Lookup order for account user@example.com:
    1. TASKSYNC_AUTH_TOKEN_USER_EXAMPLE_COM
    2. TASKSYNC_AUTH_TOKEN
    """

    TOKEN_VAR = "TASKSYNC_AUTH_TOKEN"

    def __init__(self, environ: Optional[dict[str, str]] = None):
        """
        Args:
            environ: Mapping to read from (defaults to os.environ)
        """
        self._environ = environ if environ is not None else os.environ
        self._cache: dict[str, str] = {}
        self.logger = logging.getLogger("EnvironmentCredentialProvider")

    def obtain_bearer_token(
        self,
        account_name: str,
        force_refresh: bool = False,
    ) -> Optional[str]:
        if force_refresh:
            self._cache.pop(account_name, None)
        elif account_name in self._cache:
            return self._cache[account_name]

        if not account_name:
            raise CredentialError("No account name given")

        token = self._environ.get(self._account_var(account_name)) or self._environ.get(
            self.TOKEN_VAR
        )
        if not token:
            self.logger.error(f"No bearer token configured for {account_name}")
            return None

        self._cache[account_name] = token
        return token

    def _account_var(self, account_name: str) -> str:
        suffix = "".join(c if c.isalnum() else "_" for c in account_name.upper())
        return f"{self.TOKEN_VAR}_{suffix}"
