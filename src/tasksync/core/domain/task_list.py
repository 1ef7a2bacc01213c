"""
TaskList - A remote list of tasks mirroring one local folder.
"""

from typing import Any, Mapping, Optional, Union

from ..exceptions import ActionFailureError
from .enums import NoteType, SyncAction
from .keys import ActionType, EntityType, Folders, LocalKeys, WireKeys
from .local_row import LocalRow
from .node import Node
from .resolver import evaluate_sync_action
from .task import Task


class TaskList(Node):
    """
    An ordered sequence of tasks.

    The list is the single owner of its tasks. Ordering is kept only in the
    sequence itself, so prior siblings are always consistent with it.
    """

    def __init__(self, name: str = "", index: int = 1):
        super().__init__(name)
        self.index = index
        self._children: list[Task] = []

    # -------------------------------------------------------------------------
    # Children
    # -------------------------------------------------------------------------

    @property
    def children(self) -> list[Task]:
        """Copy of the child sequence."""
        return list(self._children)

    @property
    def child_task_count(self) -> int:
        return len(self._children)

    def add_child_task(self, task: Optional[Task], index: Optional[int] = None) -> bool:
        """
        Insert a task, at the end unless index is given.

        Returns:
            False if the task is None, already in a list, or index is invalid
        """
        if task is None:
            return False

        if task.parent is not None:
            where = "this" if task.parent is self else "another"
            self.logger.error(f"Add child task: {task!r} already belongs to {where} list")
            return False

        if index is None:
            index = len(self._children)
        elif index < 0 or index > len(self._children):
            self.logger.error(f"Add child task: invalid index {index}")
            return False

        self._children.insert(index, task)
        task.parent = self
        return True

    def remove_child_task(self, task: Task) -> bool:
        """Remove a task; its follower now follows the removed task's predecessor."""
        if self.get_child_task_index(task) == -1:
            return False

        self._children.remove(task)
        task.parent = None
        return True

    def move_child_task(self, task: Task, index: int) -> bool:
        """Move a task within this list to a new position."""
        if index < 0 or index >= len(self._children):
            self.logger.error(f"Move child task: invalid index {index}")
            return False

        pos = self.get_child_task_index(task)
        if pos == -1:
            self.logger.error("Move child task: the task should be in the list")
            return False

        if pos == index:
            return True

        return self.remove_child_task(task) and self.add_child_task(task, index)

    def get_child_task_index(self, task: Task) -> int:
        """Position of a task, -1 if absent."""
        for i, child in enumerate(self._children):
            if child is task:
                return i
        return -1

    def get_child_task_by_index(self, index: int) -> Optional[Task]:
        if index < 0 or index >= len(self._children):
            self.logger.error(f"Get task by index: invalid index {index}")
            return None
        return self._children[index]

    def find_child_task_by_gid(self, gid: str) -> Optional[Task]:
        for task in self._children:
            if task.remote_id == gid:
                return task
        return None

    def prior_sibling_of(self, task: Task) -> Optional[Task]:
        """Predecessor of a task in this list, None for the head or absent tasks."""
        pos = self.get_child_task_index(task)
        if pos <= 0:
            return None
        return self._children[pos - 1]

    # -------------------------------------------------------------------------
    # Wire Actions
    # -------------------------------------------------------------------------

    def create_action(self, action_id: int) -> dict[str, Any]:
        return {
            WireKeys.ACTION_TYPE: ActionType.CREATE,
            WireKeys.ACTION_ID: action_id,
            WireKeys.INDEX: self.index,
            WireKeys.ENTITY_DELTA: {
                WireKeys.NAME: self.name,
                WireKeys.CREATOR_ID: None,
                WireKeys.ENTITY_TYPE: EntityType.GROUP,
            },
        }

    def update_action(self, action_id: int) -> dict[str, Any]:
        fields = {
            WireKeys.NAME: self.name,
            WireKeys.DELETED: self.deleted,
        }
        return {
            WireKeys.ACTION_TYPE: ActionType.UPDATE,
            WireKeys.ACTION_ID: action_id,
            WireKeys.ID: self.remote_id,
            WireKeys.ENTITY_DELTA: self._changed_delta(
                fields, fallback=(WireKeys.NAME, WireKeys.DELETED)
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
        except (TypeError, ValueError) as e:
            raise ActionFailureError(
                f"Failed to read task list content from remote JSON: {e}",
                node_id=self.remote_id,
                cause=e,
            )

        self.clear_changes()

    def apply_local_json(self, js: Optional[Mapping[str, Any]]) -> None:
        if not js or LocalKeys.META_NOTE not in js:
            self.logger.warning("apply_local_json: nothing is available")
            return

        folder = js[LocalKeys.META_NOTE]
        try:
            folder_type = NoteType.from_value(folder[LocalKeys.TYPE])
        except (KeyError, ValueError):
            self.logger.error(f"Invalid folder type: {folder.get(LocalKeys.TYPE)!r}")
            return

        if folder_type == NoteType.FOLDER:
            self.name = Folders.PREFIX + folder.get(LocalKeys.SNIPPET, "")
        elif folder_type == NoteType.SYSTEM:
            folder_id = folder.get(LocalKeys.ID)
            if folder_id == Folders.ROOT_FOLDER_ID:
                self.name = Folders.PREFIX + Folders.DEFAULT
            elif folder_id == Folders.CALL_RECORD_FOLDER_ID:
                self.name = Folders.PREFIX + Folders.CALL_NOTE
            else:
                self.logger.error(f"Invalid system folder: {folder_id!r}")
        else:
            self.logger.error(f"Invalid type for a task list: {folder_type.name}")

    def to_local_json(self) -> Optional[dict[str, Any]]:
        folder_name = self.name
        if folder_name.startswith(Folders.PREFIX):
            folder_name = folder_name[len(Folders.PREFIX):]

        if folder_name in (Folders.DEFAULT, Folders.CALL_NOTE):
            folder_type = NoteType.SYSTEM
        else:
            folder_type = NoteType.FOLDER

        return {
            LocalKeys.META_NOTE: {
                LocalKeys.SNIPPET: folder_name,
                LocalKeys.TYPE: folder_type.value,
            }
        }

    # -------------------------------------------------------------------------
    # Sync
    # -------------------------------------------------------------------------

    def resolve_sync_action(
        self,
        row: Union[LocalRow, Mapping[str, Any]],
    ) -> SyncAction:
        return evaluate_sync_action(self, row)
