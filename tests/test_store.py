"""Test the in-memory task store."""
import threading

import pytest

from verticals.tasks.errors import TaskNotFoundError, TaskValidationError
from verticals.tasks.models.schemas import TaskPriority, TaskStatus
from verticals.tasks.repository import TaskStore
from verticals.tasks.rules import validate_task
from verticals.tasks.seed import demo_tasks


def test_seed_sets_next_id(store):
    assert store.count() == 3
    assert [t.id for t in store.all()] == [1, 2, 3]
    assert store.next_id == 4


def test_empty_store_starts_at_one(empty_store):
    task = empty_store.insert({"title": "first"})
    assert task.id == 1


def test_insert_applies_defaults(store, clock):
    task = store.insert({"title": "  Learn Docker  ", "priority": "high"})
    assert task.id == 4
    assert task.title == "Learn Docker"
    assert task.description == ""
    assert task.status is TaskStatus.PENDING
    assert task.priority is TaskPriority.HIGH
    assert task.due_date is None
    assert task.created_at == task.updated_at == clock()


def test_insert_then_get_roundtrip(store):
    created = store.insert({
        "title": "Read",
        "description": " chapter 3 ",
        "status": "in-progress",
        "priority": "low",
    })
    fetched = store.get(created.id)
    assert fetched == created
    assert fetched.description == "chapter 3"
    assert fetched.created_at == fetched.updated_at


def test_ids_strictly_increase_after_delete(store):
    a = store.insert({"title": "a"})
    store.delete(a.id)
    b = store.insert({"title": "b"})
    store.delete(3)
    c = store.insert({"title": "c"})
    assert a.id < b.id < c.id
    assert len({a.id, b.id, c.id}) == 3


def test_delete_then_get_not_found(store):
    removed = store.delete(2)
    assert removed.id == 2
    with pytest.raises(TaskNotFoundError):
        store.get(2)
    assert [t.id for t in store.all()] == [1, 3]


def test_delete_unknown(store):
    with pytest.raises(TaskNotFoundError, match="99"):
        store.delete(99)


def test_get_returns_copy(store):
    task = store.get(1)
    task.title = "mutated outside"
    assert store.get(1).title == "Setup Docker Environment"


def test_replace_resets_omitted_fields(store, clock):
    before = store.get(1)
    clock.advance(minutes=5)
    task = store.replace(1, {"title": " Rewritten "})
    assert task.id == 1
    assert task.title == "Rewritten"
    assert task.description == ""
    assert task.status is TaskStatus.PENDING
    assert task.priority is TaskPriority.MEDIUM
    assert task.due_date is None
    assert task.created_at == before.created_at
    assert task.updated_at == clock()


def test_replace_unknown_checked_before_validation(store):
    with pytest.raises(TaskNotFoundError):
        store.replace(99, {"title": ""}, validate=validate_task)


def test_replace_validation_failure_leaves_record(store):
    before = store.get(2)
    with pytest.raises(TaskValidationError) as exc_info:
        store.replace(2, {"title": ""}, validate=validate_task)
    assert exc_info.value.errors == ["Title is required"]
    assert store.get(2) == before


def test_patch_changes_only_supplied_keys(store, clock):
    before = store.get(2)
    clock.advance(seconds=1)
    task, applied = store.patch(2, {"status": "completed"})
    assert applied == ["status"]
    assert task.status is TaskStatus.COMPLETED
    assert task.title == before.title
    assert task.description == before.description
    assert task.priority == before.priority
    assert task.due_date == before.due_date
    assert task.created_at == before.created_at
    assert task.updated_at > before.updated_at


def test_patch_updated_at_increases_with_frozen_clock(empty_store):
    created = empty_store.insert({"title": "t"})
    first, _ = empty_store.patch(created.id, {"priority": "low"})
    second, _ = empty_store.patch(created.id, {"priority": "high"})
    assert created.updated_at < first.updated_at < second.updated_at


def test_patch_trims_and_orders_keys(store):
    task, applied = store.patch(3, {"description": "  new  ", "title": "  T  "})
    assert applied == ["title", "description"]
    assert task.title == "T"
    assert task.description == "new"


def test_patch_ignores_unknown_keys(store):
    task, applied = store.patch(3, {"id": 42, "createdAt": "x", "priority": "urgent"})
    assert applied == ["priority"]
    assert task.id == 3


def test_patch_validates_merged_view(store):
    # The omitted title comes from the stored record, so this passes.
    task, _ = store.patch(1, {"priority": "low"}, validate=validate_task)
    assert task.priority is TaskPriority.LOW

    with pytest.raises(TaskValidationError) as exc_info:
        store.patch(1, {"status": "archived"}, validate=validate_task)
    assert exc_info.value.errors == [
        "Status must be one of: pending, in-progress, completed, cancelled"
    ]


def test_patch_unknown(store):
    with pytest.raises(TaskNotFoundError):
        store.patch(99, {"title": "x"})


def test_patch_clears_due_date(store):
    task, applied = store.patch(1, {"due_date": None})
    assert applied == ["due_date"]
    assert task.due_date is None


def test_concurrent_inserts_get_unique_ids():
    store = TaskStore(demo_tasks())
    ids = []
    lock = threading.Lock()

    def worker():
        for _ in range(50):
            task = store.insert({"title": "parallel"})
            with lock:
                ids.append(task.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(ids) == 400
    assert len(set(ids)) == 400
    assert store.count() == 403
    assert store.next_id == 404
