"""
MetaData - Sentinel task carrying local-only bookkeeping.

The remote service has no place for local folder attributes, so they ride
in the notes of a disguised task. The notes hold the local JSON plus a
meta_gid back-reference to the entity the payload describes.
"""

import json
from typing import Any, Iterable, Mapping, Optional, Union

from ..exceptions import ProgrammingFault
from .enums import SyncAction
from .keys import Folders, LocalKeys, WireKeys
from .local_row import LocalRow
from .task import Task


class MetaData(Task):
    """A sentinel task; never resolved or converted like a real task."""

    def __init__(self):
        super().__init__()
        self.related_gid: Optional[str] = None

    def set_meta(self, gid: str, meta_info: Mapping[str, Any]) -> None:
        """
        Store a payload describing the entity with remote id gid.

        Args:
            gid: Remote id of the described entity
            meta_info: Local JSON of the described entity
        """
        payload = dict(meta_info)
        payload[LocalKeys.META_GID] = gid
        self.notes = json.dumps(payload)
        self.name = Folders.META_NOTE_NAME
        self.related_gid = gid

    @property
    def payload(self) -> Optional[dict[str, Any]]:
        """The deserialized notes, or None if they do not parse."""
        if self.notes is None:
            return None
        try:
            payload = json.loads(self.notes.strip())
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None

    def is_worth_saving(self) -> bool:
        return self.notes is not None

    def apply_remote_json(self, js: Optional[Mapping[str, Any]]) -> None:
        super().apply_remote_json(js)
        if self.notes is None:
            return

        payload = self.payload
        if payload is None or LocalKeys.META_GID not in payload:
            self.logger.warning(f"Failed to get related gid from {self.remote_id}")
            self.related_gid = None
            return
        self.related_gid = str(payload[LocalKeys.META_GID])

    # -------------------------------------------------------------------------
    # Disallowed
    # -------------------------------------------------------------------------

    def apply_local_json(self, js: Optional[Mapping[str, Any]]) -> None:
        raise ProgrammingFault("MetaData.apply_local_json should not be called")

    def to_local_json(self) -> Optional[dict[str, Any]]:
        raise ProgrammingFault("MetaData.to_local_json should not be called")

    def resolve_sync_action(
        self,
        row: Union[LocalRow, Mapping[str, Any]],
    ) -> SyncAction:
        raise ProgrammingFault("MetaData.resolve_sync_action should not be called")


def locate_sentinel(remote_tasks: Iterable[Mapping[str, Any]]) -> Optional[MetaData]:
    """
    Find the sentinel among the remote tasks of a list.

    The sentinel is the task whose notes deserialize and carry the
    back-reference field.

    Returns:
        MetaData built from the first matching descriptor, or None
    """
    for js in remote_tasks:
        notes = js.get(WireKeys.NOTES)
        if not notes:
            continue
        try:
            payload = json.loads(notes.strip())
        except (AttributeError, ValueError):
            continue
        if isinstance(payload, dict) and LocalKeys.META_GID in payload:
            metadata = MetaData()
            metadata.apply_remote_json(js)
            return metadata
    return None
