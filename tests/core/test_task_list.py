"""Tests for TaskList ordering and conversion."""

import pytest

from tasksync.core.domain import (
    ActionType,
    EntityType,
    Folders,
    LocalKeys,
    NoteType,
    Task,
    TaskList,
    WireKeys,
)


def make_list(*names, remote_id="L1"):
    task_list = TaskList("[MIUI_Notes]Groceries")
    task_list.remote_id = remote_id
    for name in names:
        task = Task(name)
        task.remote_id = f"T-{name}"
        task_list.add_child_task(task)
    return task_list


def assert_chain(task_list):
    """Exactly one head, and prior_sibling walks from the tail to it in order."""
    children = task_list.children
    heads = [t for t in children if t.prior_sibling is None]
    assert len(heads) == (1 if children else 0)

    walked = []
    task = children[-1] if children else None
    while task is not None and len(walked) <= len(children):
        walked.append(task)
        task = task.prior_sibling
    assert list(reversed(walked)) == children


class TestChildren:
    """Tests for the owned task sequence."""

    def test_add_appends_and_sets_parent(self):
        task_list = TaskList("Groceries")
        milk = Task("Milk")

        assert task_list.add_child_task(milk)

        assert milk.parent is task_list
        assert task_list.children == [milk]
        assert milk.prior_sibling is None

    def test_add_none_rejected(self):
        assert not TaskList().add_child_task(None)

    def test_add_at_index(self):
        task_list = make_list("Milk", "Bread")
        eggs = Task("Eggs")

        assert task_list.add_child_task(eggs, 1)

        assert [t.name for t in task_list.children] == ["Milk", "Eggs", "Bread"]
        assert eggs.prior_sibling.name == "Milk"
        assert task_list.get_child_task_by_index(2).prior_sibling is eggs

    def test_add_invalid_index(self):
        task_list = make_list("Milk")
        assert not task_list.add_child_task(Task("Eggs"), 5)
        assert not task_list.add_child_task(Task("Eggs"), -1)
        assert task_list.child_task_count == 1

    def test_add_task_owned_elsewhere_rejected(self):
        first = make_list("Milk")
        second = TaskList("Other")
        milk = first.get_child_task_by_index(0)

        assert not second.add_child_task(milk)
        assert not first.add_child_task(milk)
        assert milk.parent is first
        assert second.child_task_count == 0

    def test_remove_relinks_follower(self):
        task_list = make_list("Milk", "Eggs", "Bread")
        milk, eggs, bread = task_list.children

        assert task_list.remove_child_task(eggs)

        assert eggs.parent is None
        assert bread.prior_sibling is milk
        assert eggs.prior_sibling is None

    def test_remove_head(self):
        task_list = make_list("Milk", "Eggs")
        milk, eggs = task_list.children

        task_list.remove_child_task(milk)

        assert eggs.prior_sibling is None

    def test_remove_absent(self):
        task_list = make_list("Milk")
        assert not task_list.remove_child_task(Task("Other"))

    def test_move(self):
        task_list = make_list("Milk", "Eggs", "Bread")
        milk, eggs, bread = task_list.children

        assert task_list.move_child_task(bread, 0)

        assert task_list.children == [bread, milk, eggs]
        assert bread.prior_sibling is None
        assert milk.prior_sibling is bread
        assert eggs.prior_sibling is milk

    def test_move_same_position(self):
        task_list = make_list("Milk", "Eggs")
        eggs = task_list.get_child_task_by_index(1)

        assert task_list.move_child_task(eggs, 1)
        assert task_list.get_child_task_index(eggs) == 1

    def test_move_invalid(self):
        task_list = make_list("Milk")
        assert not task_list.move_child_task(Task("Other"), 0)
        assert not task_list.move_child_task(task_list.children[0], 3)

    def test_index_lookup_uses_identity(self):
        task_list = make_list("Milk")
        twin = Task("Milk")
        assert task_list.get_child_task_index(twin) == -1

    def test_find_by_gid(self):
        task_list = make_list("Milk", "Eggs")
        assert task_list.find_child_task_by_gid("T-Eggs").name == "Eggs"
        assert task_list.find_child_task_by_gid("missing") is None

    def test_get_by_invalid_index(self):
        assert make_list("Milk").get_child_task_by_index(1) is None

    def test_chain_after_mixed_edits(self):
        task_list = make_list("Milk", "Eggs", "Bread", "Butter")
        milk, eggs, bread, butter = task_list.children
        assert_chain(task_list)

        task_list.move_child_task(butter, 0)
        assert_chain(task_list)
        task_list.remove_child_task(eggs)
        assert_chain(task_list)
        task_list.add_child_task(Task("Jam"), 1)
        assert_chain(task_list)
        task_list.move_child_task(milk, task_list.child_task_count - 1)
        assert_chain(task_list)
        task_list.remove_child_task(butter)
        assert_chain(task_list)
        task_list.add_child_task(eggs, 0)
        assert_chain(task_list)

        assert [t.name for t in task_list.children] == ["Eggs", "Jam", "Bread", "Milk"]

        for task in task_list.children:
            task_list.remove_child_task(task)
            assert_chain(task_list)
        assert task_list.child_task_count == 0

    def test_children_is_a_copy(self):
        task_list = make_list("Milk")
        task_list.children.append(Task("Sneaky"))
        assert task_list.child_task_count == 1


class TestWireActions:
    """Tests for TaskList wire actions."""

    def test_create_action(self):
        task_list = TaskList("[MIUI_Notes]Groceries", index=3)

        action = task_list.create_action(7)

        assert action[WireKeys.ACTION_TYPE] == ActionType.CREATE
        assert action[WireKeys.ACTION_ID] == 7
        assert action[WireKeys.INDEX] == 3
        assert action[WireKeys.ENTITY_DELTA] == {
            WireKeys.NAME: "[MIUI_Notes]Groceries",
            WireKeys.CREATOR_ID: None,
            WireKeys.ENTITY_TYPE: EntityType.GROUP,
        }

    def test_update_action_carries_changed_fields(self):
        task_list = make_list()
        task_list.clear_changes()
        task_list.name = "[MIUI_Notes]Shopping"

        action = task_list.update_action(2)

        assert action[WireKeys.ID] == "L1"
        assert action[WireKeys.ENTITY_DELTA] == {WireKeys.NAME: "[MIUI_Notes]Shopping"}

    def test_update_action_without_changes(self):
        task_list = make_list()
        task_list.clear_changes()

        delta = task_list.update_action(2)[WireKeys.ENTITY_DELTA]

        assert delta == {WireKeys.NAME: "[MIUI_Notes]Groceries", WireKeys.DELETED: False}


class TestConversion:
    """Tests for remote and local JSON conversion."""

    def test_apply_remote_json(self):
        task_list = TaskList()
        task_list.apply_remote_json({"id": "L9", "last_modified": 55, "name": "Work"})

        assert task_list.remote_id == "L9"
        assert task_list.last_modified == 55
        assert task_list.name == "Work"
        assert not task_list.changed_fields

    def test_apply_local_folder(self):
        task_list = TaskList()
        task_list.apply_local_json({
            LocalKeys.META_NOTE: {LocalKeys.TYPE: NoteType.FOLDER.value, LocalKeys.SNIPPET: "Trips"},
        })
        assert task_list.name == Folders.PREFIX + "Trips"

    @pytest.mark.parametrize("folder_id, expected", [
        (Folders.ROOT_FOLDER_ID, Folders.DEFAULT),
        (Folders.CALL_RECORD_FOLDER_ID, Folders.CALL_NOTE),
    ])
    def test_apply_local_system_folder(self, folder_id, expected):
        task_list = TaskList()
        task_list.apply_local_json({
            LocalKeys.META_NOTE: {LocalKeys.TYPE: NoteType.SYSTEM.value, LocalKeys.ID: folder_id},
        })
        assert task_list.name == Folders.PREFIX + expected

    def test_apply_local_note_ignored(self):
        task_list = TaskList("Before")
        task_list.apply_local_json({LocalKeys.META_NOTE: {LocalKeys.TYPE: NoteType.NOTE.value}})
        assert task_list.name == "Before"

    def test_to_local_json(self):
        js = TaskList(Folders.PREFIX + "Trips").to_local_json()
        assert js[LocalKeys.META_NOTE] == {
            LocalKeys.SNIPPET: "Trips",
            LocalKeys.TYPE: NoteType.FOLDER.value,
        }

    def test_to_local_json_system(self):
        js = TaskList(Folders.PREFIX + Folders.DEFAULT).to_local_json()
        assert js[LocalKeys.META_NOTE][LocalKeys.TYPE] == NoteType.SYSTEM.value
