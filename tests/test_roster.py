"""Tests for roster operations."""

from datetime import datetime, timezone

import pytest

from relentless.core.exceptions import TaskNotFoundError
from relentless.tracking.roster import (
    add_task,
    create_task,
    find_task,
    order_for_today,
    remove_task,
    set_archived,
)
from tests.conftest import make_task


class TestCreate:
    """Creating protocols."""

    def test_create_strips_title_and_stamps_time(self):
        now = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        task = create_task("  Cold shower  ", now=now)
        assert task.title == "Cold shower"
        assert task.created_at == now
        assert not task.archived
        assert task.id

    def test_ids_are_unique(self):
        assert create_task("A").id != create_task("A").id

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValueError):
            create_task(title)

    def test_add_rejects_duplicate_id(self, sample_tasks):
        with pytest.raises(ValueError):
            add_task(sample_tasks, make_task("task-run", "Again", "2024-03-02"))

    def test_add_appends_without_mutating(self, sample_tasks):
        new = make_task("task-new", "New", "2024-03-02")
        updated = add_task(sample_tasks, new)
        assert updated[-1] is new
        assert len(sample_tasks) == 3


class TestRemoveAndArchive:
    """Removing and archiving protocols."""

    def test_remove(self, sample_tasks):
        remaining = remove_task(sample_tasks, "task-read")
        assert [t.id for t in remaining] == ["task-run", "task-old"]

    def test_remove_unknown(self, sample_tasks):
        with pytest.raises(TaskNotFoundError):
            remove_task(sample_tasks, "nope")

    def test_archive_and_restore(self, sample_tasks):
        archived = set_archived(sample_tasks, "task-run")
        assert archived[0].archived
        assert not sample_tasks[0].archived
        restored = set_archived(archived, "task-run", archived=False)
        assert not restored[0].archived
        assert restored[0].created_at == sample_tasks[0].created_at

    def test_archive_unknown(self, sample_tasks):
        with pytest.raises(TaskNotFoundError):
            set_archived(sample_tasks, "nope")


class TestFindTask:
    """Resolving user references."""

    def test_exact_id(self, sample_tasks):
        assert find_task(sample_tasks, "task-read").title == "Read"

    def test_title_case_insensitive(self, sample_tasks):
        assert find_task(sample_tasks, "old HABIT").id == "task-old"

    def test_unique_prefix(self, sample_tasks):
        assert find_task(sample_tasks, "task-ru").id == "task-run"

    def test_ambiguous_prefix(self, sample_tasks):
        with pytest.raises(TaskNotFoundError):
            find_task(sample_tasks, "task-")

    def test_duplicate_titles_are_ambiguous(self):
        tasks = [make_task("a1", "Read", "2024-03-01"), make_task("b2", "read", "2024-03-01")]
        with pytest.raises(TaskNotFoundError):
            find_task(tasks, "Read")

    @pytest.mark.parametrize("ref", ["", "missing"])
    def test_not_found(self, sample_tasks, ref):
        with pytest.raises(TaskNotFoundError):
            find_task(sample_tasks, ref)


def test_order_for_today_puts_open_tasks_first(sample_tasks):
    items = [(task, index) for index, task in enumerate(sample_tasks)]
    log = {"2024-03-06": {"task-run"}}
    ordered = order_for_today(items, log, "2024-03-06")
    assert [t.id for t, _ in ordered] == ["task-read", "task-old", "task-run"]
