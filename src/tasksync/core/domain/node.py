"""
Node - Abstract synchronizable entity.

A node mirrors one remote entity (a task or a task list) and knows how to
turn itself into wire actions, how to absorb remote and local JSON, and
which sync action applies to it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Union

from ..exceptions import IdentityError
from .enums import SyncAction
from .keys import WireKeys
from .local_row import LocalRow


class Node(ABC):
    """
    Base class for Task, TaskList and MetaData.

    Tracks which remotely visible fields changed since the last remote
    acknowledgement so update actions only carry those fields.
    """

    def __init__(self, name: str = ""):
        self._remote_id: Optional[str] = None
        self._name = name
        self._deleted = False
        self.last_modified = 0
        self._changes: set[str] = set()
        self.logger = logging.getLogger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def remote_id(self) -> Optional[str]:
        """Remote id, None until the first successful create."""
        return self._remote_id

    @remote_id.setter
    def remote_id(self, value: Optional[str]) -> None:
        if self._remote_id and value != self._remote_id:
            raise IdentityError(
                f"Remote id of {self!r} is immutable (got {value!r})",
                node_id=self._remote_id,
            )
        self._remote_id = value or None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._set_tracked("_name", WireKeys.NAME, value)

    @property
    def deleted(self) -> bool:
        return self._deleted

    @deleted.setter
    def deleted(self, value: bool) -> None:
        self._set_tracked("_deleted", WireKeys.DELETED, bool(value))

    # -------------------------------------------------------------------------
    # Change Tracking
    # -------------------------------------------------------------------------

    @property
    def changed_fields(self) -> frozenset[str]:
        """Wire field names changed since the last acknowledgement."""
        return frozenset(self._changes)

    def clear_changes(self) -> None:
        """Forget recorded changes (after the remote acknowledged them)."""
        self._changes.clear()

    def _set_tracked(self, attr: str, wire_key: str, value: Any) -> None:
        if getattr(self, attr) != value:
            self._changes.add(wire_key)
        setattr(self, attr, value)

    def _changed_delta(
        self,
        fields: Mapping[str, Any],
        fallback: Iterable[str],
    ) -> dict[str, Any]:
        """
        Pick the changed entries of fields.

        Args:
            fields: All updatable wire fields and their current values
            fallback: Keys sent when no change was recorded

        Returns:
            Entity delta for an update action
        """
        keys = [key for key in fields if key in self._changes]
        if not keys:
            keys = list(fallback)
        return {key: fields[key] for key in keys}

    # -------------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------------

    @abstractmethod
    def create_action(self, action_id: int) -> dict[str, Any]:
        """Build the wire action creating this node remotely."""
        ...

    @abstractmethod
    def update_action(self, action_id: int) -> dict[str, Any]:
        """Build the wire action pushing changed fields to the remote."""
        ...

    @abstractmethod
    def apply_remote_json(self, js: Optional[Mapping[str, Any]]) -> None:
        """Absorb a remote entity descriptor."""
        ...

    @abstractmethod
    def apply_local_json(self, js: Optional[Mapping[str, Any]]) -> None:
        """Absorb the local store's JSON representation."""
        ...

    @abstractmethod
    def to_local_json(self) -> Optional[dict[str, Any]]:
        """Produce the local store's JSON representation."""
        ...

    @abstractmethod
    def resolve_sync_action(
        self,
        row: Union[LocalRow, Mapping[str, Any]],
    ) -> SyncAction:
        """Decide the sync action against a local row snapshot."""
        ...

    def is_worth_saving(self) -> bool:
        """Check if the node carries content worth persisting locally."""
        return bool(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(remote_id={self._remote_id!r}, name={self._name!r})"
