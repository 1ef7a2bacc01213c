"""
Credential Adapters - Bearer token providers.
"""

from .environment import EnvironmentCredentialProvider

__all__ = ["EnvironmentCredentialProvider"]
