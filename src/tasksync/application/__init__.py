"""
Application Layer - Use cases and orchestration.

This layer contains:
- sync/: The per-node sync pass driven by an external orchestrator
- logging_setup: Root logging configuration driven by SyncConfig.verbose
"""

from .logging_setup import setup_logging
from .sync import FailedOperation, SyncPass, SyncResult

__all__ = [
    "setup_logging",
    "FailedOperation",
    "SyncPass",
    "SyncResult",
]
