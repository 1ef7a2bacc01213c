"""
Domain - Sync nodes, sync actions and the identity bridge.
"""

from .enums import NoteType, SessionState, SyncAction
from .events import (
    DomainEvent,
    EventBus,
    NodeFailed,
    NodeSynced,
    SyncCompleted,
    SyncStarted,
)
from .identity import identity_update
from .keys import ActionType, EntityType, Folders, LocalKeys, WireKeys
from .local_row import LocalColumns, LocalRow
from .metadata import MetaData, locate_sentinel
from .node import Node
from .resolver import resolve_sync_action
from .task import Task
from .task_list import TaskList

__all__ = [
    "NoteType",
    "SessionState",
    "SyncAction",
    "DomainEvent",
    "EventBus",
    "NodeFailed",
    "NodeSynced",
    "SyncCompleted",
    "SyncStarted",
    "identity_update",
    "ActionType",
    "EntityType",
    "Folders",
    "LocalKeys",
    "WireKeys",
    "LocalColumns",
    "LocalRow",
    "MetaData",
    "locate_sentinel",
    "Node",
    "resolve_sync_action",
    "Task",
    "TaskList",
]
