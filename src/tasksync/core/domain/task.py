"""
Task - A single remote task mirroring one local note.
"""

import copy
import json
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from ..exceptions import ActionFailureError
from .enums import NoteType, SyncAction
from .keys import ActionType, EntityType, Folders, LocalKeys, WireKeys
from .local_row import LocalRow
from .node import Node
from .resolver import evaluate_sync_action

if TYPE_CHECKING:
    from .metadata import MetaData
    from .task_list import TaskList


class Task(Node):
    """
    A remote task.

    The owning TaskList is the only holder of the task; prior_sibling is a
    lookup into the owner's sequence rather than a stored reference.
    """

    def __init__(self, name: str = "", notes: Optional[str] = None):
        super().__init__(name)
        self._notes = notes
        self._completed = False
        self.meta_info: Optional[dict[str, Any]] = None
        self.parent: Optional["TaskList"] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def notes(self) -> Optional[str]:
        return self._notes

    @notes.setter
    def notes(self, value: Optional[str]) -> None:
        self._set_tracked("_notes", WireKeys.NOTES, value)

    @property
    def completed(self) -> bool:
        return self._completed

    @completed.setter
    def completed(self, value: bool) -> None:
        self._set_tracked("_completed", WireKeys.COMPLETED, bool(value))

    @property
    def prior_sibling(self) -> Optional["Task"]:
        """Immediate predecessor in the owning list, None for the head."""
        if self.parent is None:
            return None
        return self.parent.prior_sibling_of(self)

    def set_meta_info(self, metadata: Optional["MetaData"]) -> None:
        """Adopt the local JSON carried by a MetaData sentinel."""
        if metadata is None or metadata.notes is None:
            return
        try:
            self.meta_info = json.loads(metadata.notes)
        except ValueError as e:
            self.logger.warning(f"Failed to parse meta info of {self.remote_id}: {e}")
            self.meta_info = None

    def is_worth_saving(self) -> bool:
        return (
            self.meta_info is not None
            or bool(self.name and self.name.strip())
            or bool(self.notes and self.notes.strip())
        )

    # -------------------------------------------------------------------------
    # Wire Actions
    # -------------------------------------------------------------------------

    def create_action(self, action_id: int) -> dict[str, Any]:
        if self.parent is None:
            raise ActionFailureError(
                f"Cannot create task '{self.name}' without a parent list"
            )
        if not self.parent.remote_id:
            raise ActionFailureError(
                f"Cannot create task '{self.name}' before its list '{self.parent.name}'"
            )

        entity: dict[str, Any] = {
            WireKeys.NAME: self.name,
            WireKeys.CREATOR_ID: None,
            WireKeys.ENTITY_TYPE: EntityType.TASK,
        }
        if self.notes is not None:
            entity[WireKeys.NOTES] = self.notes

        action: dict[str, Any] = {
            WireKeys.ACTION_TYPE: ActionType.CREATE,
            WireKeys.ACTION_ID: action_id,
            WireKeys.INDEX: self.parent.get_child_task_index(self),
            WireKeys.ENTITY_DELTA: entity,
            WireKeys.PARENT_ID: self.parent.remote_id,
            WireKeys.DEST_PARENT_TYPE: EntityType.GROUP,
            WireKeys.LIST_ID: self.parent.remote_id,
        }

        prior = self.prior_sibling
        if prior is not None:
            action[WireKeys.PRIOR_SIBLING_ID] = prior.remote_id

        return action

    def update_action(self, action_id: int) -> dict[str, Any]:
        fields = {
            WireKeys.NAME: self.name,
            WireKeys.NOTES: self.notes,
            WireKeys.COMPLETED: self.completed,
            WireKeys.DELETED: self.deleted,
        }
        return {
            WireKeys.ACTION_TYPE: ActionType.UPDATE,
            WireKeys.ACTION_ID: action_id,
            WireKeys.ID: self.remote_id,
            WireKeys.ENTITY_DELTA: self._changed_delta(
                fields, fallback=(WireKeys.NAME, WireKeys.NOTES, WireKeys.DELETED)
            ),
        }

    # -------------------------------------------------------------------------
    # Content Conversion
    # -------------------------------------------------------------------------

    def apply_remote_json(self, js: Optional[Mapping[str, Any]]) -> None:
        if js is None:
            return

        try:
            if WireKeys.ID in js:
                self.remote_id = str(js[WireKeys.ID])
            if WireKeys.LAST_MODIFIED in js:
                self.last_modified = int(js[WireKeys.LAST_MODIFIED])
            if WireKeys.NAME in js:
                self._name = str(js[WireKeys.NAME])
            if WireKeys.NOTES in js:
                self._notes = js[WireKeys.NOTES]
            if WireKeys.DELETED in js:
                self._deleted = bool(js[WireKeys.DELETED])
            if WireKeys.COMPLETED in js:
                self._completed = bool(js[WireKeys.COMPLETED])
        except (TypeError, ValueError) as e:
            raise ActionFailureError(
                f"Failed to read task content from remote JSON: {e}",
                node_id=self.remote_id,
                cause=e,
            )

        self.clear_changes()

    def apply_local_json(self, js: Optional[Mapping[str, Any]]) -> None:
        if not js or LocalKeys.META_NOTE not in js or LocalKeys.META_DATA not in js:
            self.logger.warning("apply_local_json: nothing is available")
            return

        note = js[LocalKeys.META_NOTE]
        try:
            note_type = NoteType.from_value(note.get(LocalKeys.TYPE, NoteType.NOTE.value))
        except ValueError:
            self.logger.error(f"Invalid note type: {note.get(LocalKeys.TYPE)!r}")
            return

        if note_type != NoteType.NOTE:
            self.logger.error(f"Invalid type for a task: {note_type.name}")
            return

        for data in js[LocalKeys.META_DATA]:
            if data.get(LocalKeys.MIME_TYPE, Folders.NOTE_MIME_TYPE) == Folders.NOTE_MIME_TYPE:
                self.name = data.get(LocalKeys.CONTENT, "")
                break

    def to_local_json(self) -> Optional[dict[str, Any]]:
        if self.meta_info is None:
            # created remotely, never synced down before
            if not self.name:
                self.logger.warning("The note seems to be an empty one")
                return None
            return {
                LocalKeys.META_NOTE: {LocalKeys.TYPE: NoteType.NOTE.value},
                LocalKeys.META_DATA: [
                    {
                        LocalKeys.MIME_TYPE: Folders.NOTE_MIME_TYPE,
                        LocalKeys.CONTENT: self.name,
                    }
                ],
            }

        js = copy.deepcopy(self.meta_info)
        note = js.setdefault(LocalKeys.META_NOTE, {})
        for data in js.setdefault(LocalKeys.META_DATA, []):
            if data.get(LocalKeys.MIME_TYPE, Folders.NOTE_MIME_TYPE) == Folders.NOTE_MIME_TYPE:
                data[LocalKeys.CONTENT] = self.name
                break
        note[LocalKeys.TYPE] = NoteType.NOTE.value
        return js

    # -------------------------------------------------------------------------
    # Sync
    # -------------------------------------------------------------------------

    def resolve_sync_action(
        self,
        row: Union[LocalRow, Mapping[str, Any]],
    ) -> SyncAction:
        return evaluate_sync_action(self, row)
