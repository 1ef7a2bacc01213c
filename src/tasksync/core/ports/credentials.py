"""
Credential Provider Port - Source of bearer tokens for the remote service.
"""

from abc import ABC, abstractmethod
from typing import Optional


class CredentialProviderPort(ABC):
    """
    Abstract interface for bearer token providers.

    Implementations may raise CredentialError instead of returning None.
    """

    @abstractmethod
    def obtain_bearer_token(
        self,
        account_name: str,
        force_refresh: bool = False,
    ) -> Optional[str]:
        """
        Get a bearer token for an account.

        Args:
            account_name: Account to authenticate
            force_refresh: Invalidate any cached token and fetch a new one

        Returns:
            Token, or None if the account cannot be authenticated
        """
        ...
