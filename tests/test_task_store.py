# tests/test_task_store.py

from __future__ import annotations

import pytest

from taskpad.core.notices import NoticeBoard, NoticeSeverity
from taskpad.tasks.task_errors import NotFoundError, ValidationError
from taskpad.tasks.task_models import MAX_TEXT_LENGTH, Priority, TaskFilter
from taskpad.tasks.task_store import SAVE_FAILED_MESSAGE, TaskStore

from .fakes import FailingTaskStorage, InMemoryTaskStorage


def _seed(store: TaskStore, *texts: str) -> list[str]:
    return [store.add_task(t).id for t in texts]


def test_add_task_appends_with_defaults(store: TaskStore) -> None:
    before = len(store)
    task = store.add_task("  Buy milk  ")

    assert len(store) == before + 1
    assert task.text == "Buy milk"
    assert task.completed is False
    assert task.priority is Priority.NORMAL
    assert task.created_at.tzinfo is not None
    assert store.tasks[-1] is task


@pytest.mark.parametrize("text", ["", "   ", "x" * (MAX_TEXT_LENGTH + 1), "bad\x00text"])
def test_add_task_rejects_invalid_text(store: TaskStore, text: str) -> None:
    _seed(store, "existing")
    with pytest.raises(ValidationError):
        store.add_task(text)
    assert [t.text for t in store.tasks] == ["existing"]


def test_add_task_accepts_max_length(store: TaskStore) -> None:
    task = store.add_task("y" * MAX_TEXT_LENGTH)
    assert len(task.text) == MAX_TEXT_LENGTH


def test_add_task_rejects_case_insensitive_duplicate(store: TaskStore) -> None:
    store.add_task("Buy milk")
    with pytest.raises(ValidationError, match="already exists"):
        store.add_task("buy milk")
    assert len(store) == 1


def test_toggle_is_an_involution(store: TaskStore) -> None:
    (tid,) = _seed(store, "Walk dog")
    store.toggle_task(tid)
    assert store.get_task(tid).completed is True
    store.toggle_task(tid)
    assert store.get_task(tid).completed is False


def test_toggle_unknown_id_raises(store: TaskStore) -> None:
    with pytest.raises(NotFoundError):
        store.toggle_task("task-missing")


def test_delete_preserves_order_and_second_delete_fails(store: TaskStore) -> None:
    a, b, c = _seed(store, "a", "b", "c")
    store.delete_task(b)
    assert [t.id for t in store.tasks] == [a, c]

    with pytest.raises(NotFoundError):
        store.delete_task(b)
    assert [t.id for t in store.tasks] == [a, c]


def test_duplicate_task_copies_priority_and_resets_completion(store: TaskStore) -> None:
    (tid,) = _seed(store, "Buy milk")
    store.change_priority(tid, Priority.HIGH)
    store.toggle_task(tid)

    copy = store.duplicate_task(tid)

    assert copy.text == "Buy milk (copy)"
    assert copy.id != tid
    assert copy.completed is False
    assert copy.priority is Priority.HIGH
    assert store.tasks[-1] is copy
    assert copy.created_at > store.get_task(tid).created_at


def test_duplicate_skips_duplicate_text_check(store: TaskStore) -> None:
    (tid,) = _seed(store, "X")
    first = store.duplicate_task(tid)
    second = store.duplicate_task(tid)

    assert first.text == second.text == "X (copy)"
    assert first.id != second.id
    with pytest.raises(ValidationError):
        store.add_task("x (COPY)")


def test_duplicate_of_long_text_keeps_length_limit(store: TaskStore) -> None:
    (tid,) = _seed(store, "z" * MAX_TEXT_LENGTH)
    copy = store.duplicate_task(tid)
    assert len(copy.text) == MAX_TEXT_LENGTH
    assert copy.text.endswith(" (copy)")


def test_duplicate_unknown_id_raises(store: TaskStore) -> None:
    with pytest.raises(NotFoundError):
        store.duplicate_task("nope")


def test_change_priority(store: TaskStore) -> None:
    (tid,) = _seed(store, "Pay rent")
    store.change_priority(tid, "low")
    assert store.get_task(tid).priority is Priority.LOW

    with pytest.raises(ValidationError):
        store.change_priority(tid, "urgent")
    assert store.get_task(tid).priority is Priority.LOW

    with pytest.raises(NotFoundError):
        store.change_priority("missing", "high")


def test_clear_completed_returns_count_and_keeps_order(store: TaskStore) -> None:
    ids = _seed(store, "p1", "c1", "p2", "c2", "c3")
    for tid in (ids[1], ids[3], ids[4]):
        store.toggle_task(tid)

    assert store.clear_completed() == 3
    assert [t.text for t in store.tasks] == ["p1", "p2"]


def test_clear_completed_noop_does_not_save(
    store: TaskStore, storage: InMemoryTaskStorage
) -> None:
    _seed(store, "a")
    calls = storage.save_calls
    assert store.clear_completed() == 0
    assert storage.save_calls == calls


def test_filtered_view_respects_filter_without_reordering(store: TaskStore) -> None:
    ids = _seed(store, "one", "two", "three", "four")
    store.toggle_task(ids[1])
    store.toggle_task(ids[3])

    store.set_filter(TaskFilter.ACTIVE)
    assert [t.text for t in store.filtered_view()] == ["one", "three"]
    assert all(not t.completed for t in store.filtered_view())

    store.set_filter("completed")
    assert [t.text for t in store.filtered_view()] == ["two", "four"]
    assert all(t.completed for t in store.filtered_view())

    store.set_filter("all")
    assert [t.id for t in store.filtered_view()] == ids
    assert [t.id for t in store.tasks] == ids


def test_set_filter_rejects_unknown_value(store: TaskStore) -> None:
    with pytest.raises(ValueError):
        store.set_filter("done")
    assert store.current_filter is TaskFilter.ALL


def test_stats_are_consistent(store: TaskStore) -> None:
    assert (store.stats().total, store.stats().completed, store.stats().pending) == (0, 0, 0)

    ids = _seed(store, "a", "b", "c")
    store.toggle_task(ids[0])
    stats = store.stats()
    assert stats.total == 3
    assert stats.completed == 1
    assert stats.pending == 2
    assert stats.completed + stats.pending == stats.total


def test_every_mutation_is_saved(store: TaskStore, storage: InMemoryTaskStorage) -> None:
    (tid,) = _seed(store, "a")
    store.toggle_task(tid)
    store.change_priority(tid, "high")
    copy = store.duplicate_task(tid)
    store.delete_task(copy.id)
    store.clear_completed()

    assert storage.save_calls == 6
    assert storage.records == []


def test_failed_validation_does_not_save(store: TaskStore, storage: InMemoryTaskStorage) -> None:
    with pytest.raises(ValidationError):
        store.add_task("")
    assert storage.save_calls == 0


def test_storage_failure_keeps_memory_state_and_posts_notice() -> None:
    notices = NoticeBoard()
    store = TaskStore(FailingTaskStorage(), notices)

    task = store.add_task("Still here")

    assert store.get_task(task.id) is task
    active = notices.active()
    assert len(active) == 1
    assert active[0].severity is NoticeSeverity.ERROR
    assert active[0].message == SAVE_FAILED_MESSAGE


def test_store_without_storage_works_in_memory() -> None:
    store = TaskStore()
    task = store.add_task("Ephemeral")
    assert store.load() == 0
    assert store.tasks == (task,)


def test_fresh_id_skips_collisions() -> None:
    ids = iter(["task-1", "task-1", "task-2"])
    store = TaskStore(id_factory=lambda: next(ids))

    first = store.add_task("a")
    second = store.add_task("b")

    assert (first.id, second.id) == ("task-1", "task-2")


def test_load_replaces_collection(storage: InMemoryTaskStorage) -> None:
    writer = TaskStore(storage)
    writer.add_task("persisted")

    reader = TaskStore(storage)
    assert reader.load() == 1
    assert [t.text for t in reader.tasks] == ["persisted"]
