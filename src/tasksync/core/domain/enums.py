"""
Domain Enums - Sync outcomes, local note types and session states.
"""

from enum import Enum, auto


class SyncAction(Enum):
    """Outcome of comparing a node against its local row."""

    NONE = auto()
    ADD_REMOTE = auto()
    ADD_LOCAL = auto()
    DEL_REMOTE = auto()
    DEL_LOCAL = auto()
    UPDATE_REMOTE = auto()
    UPDATE_LOCAL = auto()
    UPDATE_CONFLICT = auto()
    ERROR = auto()

    def is_remote(self) -> bool:
        """Check if the action is carried out against the remote service."""
        return self in (
            SyncAction.ADD_REMOTE,
            SyncAction.DEL_REMOTE,
            SyncAction.UPDATE_REMOTE,
        )

    def is_local(self) -> bool:
        """Check if the action is carried out against the local store."""
        return self in (
            SyncAction.ADD_LOCAL,
            SyncAction.DEL_LOCAL,
            SyncAction.UPDATE_LOCAL,
        )


class NoteType(Enum):
    """Row types of the local note store."""

    NOTE = 0
    FOLDER = 1
    SYSTEM = 2

    @classmethod
    def from_value(cls, value) -> "NoteType":
        """Parse a stored type value (int or enum)."""
        if isinstance(value, cls):
            return value
        return cls(int(value))


class SessionState(Enum):
    """Login state of a GTasksClient."""

    LOGGED_OUT = auto()
    LOGGING_IN = auto()
    LOGGED_IN = auto()
