"""
Sync Module - Applying sync actions between the local store and the remote service.
"""

from .orchestrator import FailedOperation, SyncPass, SyncResult

__all__ = [
    "FailedOperation",
    "SyncPass",
    "SyncResult",
]
