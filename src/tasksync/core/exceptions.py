"""
Exceptions - Centralized error taxonomy for the sync core.

Two families:
- TaskSyncError and subclasses: runtime conditions the orchestrator handles
  (network trouble, rejected actions, identity mismatches).
- ProgrammingFault: a defect in the caller. Never caught by the core.
"""

from typing import Any, Optional

__all__ = [
    "TaskSyncError",
    "NetworkFailureError",
    "SyncCancelledError",
    "ActionFailureError",
    "BatchRejectedError",
    "SetupParseError",
    "IdentityError",
    "CredentialError",
    "ProgrammingFault",
]


class TaskSyncError(Exception):
    """Base exception for sync failures."""

    def __init__(
        self,
        message: str,
        node_id: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.node_id = node_id
        self.cause = cause


class NetworkFailureError(TaskSyncError):
    """
    Transport-level failure (connection refused, timeout, 5xx).

    The remote state is unknown but the local state is unchanged; the
    caller may retry the whole pass later.
    """
    pass


class SyncCancelledError(NetworkFailureError):
    """A network call was refused because the pass was cancelled."""
    pass


class ActionFailureError(TaskSyncError):
    """
    The remote service rejected an action or returned unparseable data.

    The session stays valid; only the entity's sync is abandoned.
    """
    pass


class BatchRejectedError(ActionFailureError):
    """
    A flushed batch of update actions was rejected.

    Every node in the batch is abandoned, not only the one whose call
    triggered the flush.
    """

    def __init__(
        self,
        message: str,
        nodes: Optional[list[Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.nodes = list(nodes or [])


class SetupParseError(ActionFailureError):
    """The script-embedded setup payload could not be extracted."""
    pass


class IdentityError(TaskSyncError):
    """Local and remote identities disagree for an entity."""
    pass


class CredentialError(TaskSyncError):
    """The credential provider could not supply a bearer token."""
    pass


class ProgrammingFault(RuntimeError):
    """
    Raised when the core is used incorrectly.

    Examples:
    - issuing a remote call while the session is logged out
    - calling one of MetaData's disallowed methods
    """
    pass
