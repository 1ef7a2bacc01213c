"""
tasksync - Two-way sync between a local note store and a remote task service.

Layers:
- core: sync nodes, the sync action resolver, ports and exceptions
- adapters: the remote protocol client, configuration, credentials, local store
- application: the per-node sync pass
"""

__version__ = "1.0.0"

from .core.domain import (
    MetaData,
    SyncAction,
    Task,
    TaskList,
    locate_sentinel,
    resolve_sync_action,
)
from .core.exceptions import (
    ActionFailureError,
    IdentityError,
    NetworkFailureError,
    ProgrammingFault,
    TaskSyncError,
)
from .adapters.gtasks import GTasksClient
from .application import SyncPass, SyncResult, setup_logging

__all__ = [
    "MetaData",
    "SyncAction",
    "Task",
    "TaskList",
    "locate_sentinel",
    "resolve_sync_action",
    "ActionFailureError",
    "IdentityError",
    "NetworkFailureError",
    "ProgrammingFault",
    "TaskSyncError",
    "GTasksClient",
    "SyncPass",
    "SyncResult",
    "setup_logging",
]
