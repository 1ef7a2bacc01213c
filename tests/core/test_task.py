"""Tests for Task."""

import pytest

from tasksync.core.domain import (
    ActionType,
    EntityType,
    Folders,
    LocalKeys,
    MetaData,
    NoteType,
    Task,
    TaskList,
    WireKeys,
)
from tasksync.core.exceptions import ActionFailureError, IdentityError


def note_json(content, note_type=NoteType.NOTE.value):
    return {
        LocalKeys.META_NOTE: {LocalKeys.ID: 11, LocalKeys.TYPE: note_type},
        LocalKeys.META_DATA: [
            {LocalKeys.MIME_TYPE: "vnd.android.cursor.item/call_note", LocalKeys.CONTENT: "+100"},
            {LocalKeys.MIME_TYPE: Folders.NOTE_MIME_TYPE, LocalKeys.CONTENT: content},
        ],
    }


@pytest.fixture
def groceries():
    task_list = TaskList("[MIUI_Notes]Groceries")
    task_list.remote_id = "L1"
    return task_list


class TestIdentity:
    """Tests for remote id handling."""

    def test_remote_id_set_once(self):
        task = Task("Milk")
        task.remote_id = "T1"
        task.remote_id = "T1"
        assert task.remote_id == "T1"

    def test_remote_id_immutable(self):
        task = Task("Milk")
        task.remote_id = "T1"
        with pytest.raises(IdentityError):
            task.remote_id = "T2"

    def test_empty_remote_id_is_none(self):
        task = Task("Milk")
        task.remote_id = ""
        assert task.remote_id is None


class TestCreateAction:
    """Tests for Task.create_action."""

    def test_head_of_list(self, groceries):
        milk = Task("Milk", notes="2 liters")
        groceries.add_child_task(milk)

        action = milk.create_action(3)

        assert action[WireKeys.ACTION_TYPE] == ActionType.CREATE
        assert action[WireKeys.ACTION_ID] == 3
        assert action[WireKeys.INDEX] == 0
        assert action[WireKeys.PARENT_ID] == "L1"
        assert action[WireKeys.LIST_ID] == "L1"
        assert action[WireKeys.DEST_PARENT_TYPE] == EntityType.GROUP
        assert action[WireKeys.ENTITY_DELTA] == {
            WireKeys.NAME: "Milk",
            WireKeys.CREATOR_ID: None,
            WireKeys.ENTITY_TYPE: EntityType.TASK,
            WireKeys.NOTES: "2 liters",
        }
        assert WireKeys.PRIOR_SIBLING_ID not in action

    def test_with_prior_sibling(self, groceries):
        milk = Task("Milk")
        milk.remote_id = "T1"
        eggs = Task("Eggs")
        groceries.add_child_task(milk)
        groceries.add_child_task(eggs)

        action = eggs.create_action(4)

        assert action[WireKeys.INDEX] == 1
        assert action[WireKeys.PRIOR_SIBLING_ID] == "T1"
        assert WireKeys.NOTES not in action[WireKeys.ENTITY_DELTA]

    def test_without_parent(self):
        with pytest.raises(ActionFailureError):
            Task("Orphan").create_action(1)

    def test_parent_not_created(self):
        task_list = TaskList("New")
        task = Task("Milk")
        task_list.add_child_task(task)
        with pytest.raises(ActionFailureError):
            task.create_action(1)


class TestUpdateAction:
    """Tests for Task.update_action."""

    def test_only_changed_fields(self):
        task = Task()
        task.apply_remote_json({"id": "T1", "name": "Milk", "notes": "2 liters"})
        task.completed = True

        action = task.update_action(5)

        assert action[WireKeys.ACTION_TYPE] == ActionType.UPDATE
        assert action[WireKeys.ID] == "T1"
        assert action[WireKeys.ENTITY_DELTA] == {WireKeys.COMPLETED: True}

    def test_setting_same_value_is_not_a_change(self):
        task = Task()
        task.apply_remote_json({"id": "T1", "name": "Milk"})
        task.name = "Milk"
        assert not task.changed_fields

    def test_fallback_without_changes(self):
        task = Task()
        task.apply_remote_json({"id": "T1", "name": "Milk"})

        delta = task.update_action(5)[WireKeys.ENTITY_DELTA]

        assert delta == {WireKeys.NAME: "Milk", WireKeys.NOTES: None, WireKeys.DELETED: False}


class TestConversion:
    """Tests for remote and local JSON conversion."""

    def test_apply_remote_json(self):
        task = Task()
        task.apply_remote_json({
            "id": "T1", "last_modified": "120", "name": "Milk",
            "notes": "semi-skimmed", "deleted": False, "completed": True,
        })

        assert task.remote_id == "T1"
        assert task.last_modified == 120
        assert task.notes == "semi-skimmed"
        assert task.completed
        assert not task.changed_fields

    def test_apply_remote_json_bad_field(self):
        with pytest.raises(ActionFailureError):
            Task().apply_remote_json({"id": "T1", "last_modified": "yesterday"})

    def test_apply_local_json_takes_note_text(self):
        task = Task()
        task.apply_local_json(note_json("Buy milk"))
        assert task.name == "Buy milk"

    def test_apply_local_json_folder_ignored(self):
        task = Task("Before")
        task.apply_local_json(note_json("Folder", note_type=NoteType.FOLDER.value))
        assert task.name == "Before"

    def test_apply_local_json_incomplete(self):
        task = Task("Before")
        task.apply_local_json({LocalKeys.META_NOTE: {}})
        task.apply_local_json(None)
        assert task.name == "Before"

    def test_to_local_json_without_meta_info(self):
        js = Task("Milk").to_local_json()

        assert js[LocalKeys.META_NOTE][LocalKeys.TYPE] == NoteType.NOTE.value
        assert js[LocalKeys.META_DATA] == [
            {LocalKeys.MIME_TYPE: Folders.NOTE_MIME_TYPE, LocalKeys.CONTENT: "Milk"},
        ]

    def test_to_local_json_empty(self):
        assert Task().to_local_json() is None

    def test_to_local_json_keeps_meta_info(self):
        task = Task("Oat milk")
        task.meta_info = note_json("Milk")

        js = task.to_local_json()

        assert js[LocalKeys.META_NOTE][LocalKeys.ID] == 11
        assert js[LocalKeys.META_DATA][0][LocalKeys.CONTENT] == "+100"
        assert js[LocalKeys.META_DATA][1][LocalKeys.CONTENT] == "Oat milk"
        # meta_info itself is untouched
        assert task.meta_info[LocalKeys.META_DATA][1][LocalKeys.CONTENT] == "Milk"

    def test_set_meta_info(self):
        metadata = MetaData()
        metadata.set_meta("T1", note_json("Milk"))
        task = Task("Milk")

        task.set_meta_info(metadata)

        assert task.meta_info[LocalKeys.META_GID] == "T1"
        assert task.meta_info[LocalKeys.META_NOTE][LocalKeys.ID] == 11

    def test_set_meta_info_bad_notes(self):
        metadata = MetaData()
        metadata.notes = "not json"
        task = Task("Milk")

        task.set_meta_info(metadata)

        assert task.meta_info is None

    def test_is_worth_saving(self):
        assert Task("Milk").is_worth_saving()
        assert Task("", notes="some notes").is_worth_saving()
        assert not Task("   ").is_worth_saving()
