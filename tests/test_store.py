"""Tests for per-identity JSON persistence."""

import json
import os
from pathlib import Path

import pytest

from relentless.core.exceptions import StorageError
from relentless.storage.store import TrackerStore
from tests.conftest import create_corrupted_json_file, make_task


@pytest.fixture
def store(temp_dir):
    return TrackerStore("device-1", Path(temp_dir))


class TestRoundTrip:
    """Saving and loading state."""

    def test_empty_store_loads_defaults(self, store):
        assert store.load() == ([], {})

    def test_save_and_load(self, store, sample_tasks, sample_log):
        store.replace(sample_tasks, sample_log)
        tasks, log = store.load()
        assert tasks == sample_tasks
        assert log == sample_log

    def test_files_are_namespaced_by_identity(self, temp_dir, sample_tasks):
        first = TrackerStore("alice", Path(temp_dir))
        second = TrackerStore("bob", Path(temp_dir))
        first.save_tasks(sample_tasks)
        assert second.load_tasks() == []
        assert first.tasks_path == Path(temp_dir) / "alice" / "tasks.json"

    def test_persisted_format(self, store, sample_tasks):
        store.replace(sample_tasks[:1], {"2024-03-02": {"b", "a"}})
        with open(store.tasks_path) as f:
            assert json.load(f) == [{"id": "task-run", "title": "Run", "createdAt": 1709294400000}]
        with open(store.logs_path) as f:
            assert json.load(f) == {"2024-03-02": ["a", "b"]}

    def test_archived_flag_persists(self, store, sample_tasks):
        store.save_tasks(sample_tasks)
        assert [t.archived for t in store.load_tasks()] == [False, False, True]


class TestRecovery:
    """Malformed state falls back to empty defaults."""

    def test_corrupt_tasks_file(self, store):
        create_corrupted_json_file(str(store.tasks_path))
        assert store.load_tasks() == []

    def test_corrupt_log_file(self, store):
        create_corrupted_json_file(str(store.logs_path))
        assert store.load_log() == {}

    def test_tasks_file_not_a_list(self, store):
        os.makedirs(store.namespace_dir)
        store.tasks_path.write_text('{"id": "x"}')
        assert store.load_tasks() == []

    def test_bad_records_are_skipped(self, store):
        os.makedirs(store.namespace_dir)
        records = [
            {"id": "ok", "title": "Fine", "createdAt": 1709294400000},
            {"id": "", "title": "No id", "createdAt": 1709294400000},
            {"id": "t2", "title": "   ", "createdAt": 1709294400000},
            {"id": "t3", "title": "Bad time", "createdAt": "yesterday"},
            {"id": "ok", "title": "Duplicate", "createdAt": 1709294400000},
            "not a record",
        ]
        store.tasks_path.write_text(json.dumps(records))
        tasks = store.load_tasks()
        assert [(t.id, t.title) for t in tasks] == [("ok", "Fine")]

    def test_log_drops_empty_days(self, store):
        os.makedirs(store.namespace_dir)
        store.logs_path.write_text(json.dumps({"2024-03-01": [], "2024-03-02": ["a", "a"]}))
        assert store.load_log() == {"2024-03-02": {"a"}}


@pytest.mark.parametrize("identity", ["", "../escape", "has space", ".hidden"])
def test_invalid_identity_rejected(temp_dir, identity):
    with pytest.raises(StorageError):
        TrackerStore(identity, Path(temp_dir))


def test_save_failure_raises(temp_dir, sample_tasks):
    blocker = Path(temp_dir) / "blocked"
    blocker.write_text("a file, not a directory")
    store = TrackerStore("device-1", blocker)
    with pytest.raises(StorageError):
        store.save_tasks(sample_tasks)


def test_roundtrip_keeps_creation_instant(store):
    task = make_task("t", "T", "2024-03-01")
    store.save_tasks([task])
    assert store.load_tasks()[0].created_at == task.created_at


@pytest.mark.parametrize("created_at", [1e300, -1, "Infinity"])
def test_out_of_range_creation_time_skipped(store, created_at):
    os.makedirs(store.namespace_dir)
    records = [
        {"id": "ok", "title": "Fine", "createdAt": 1709294400000},
        {"id": "far", "title": "Far future", "createdAt": created_at},
    ]
    store.tasks_path.write_text(json.dumps(records))
    assert [t.id for t in store.load_tasks()] == ["ok"]


def test_infinite_creation_time_skipped(store):
    os.makedirs(store.namespace_dir)
    store.tasks_path.write_text(
        '[{"id": "ok", "title": "Fine", "createdAt": 0},'
        ' {"id": "inf", "title": "Forever", "createdAt": Infinity}]'
    )
    assert [t.id for t in store.load_tasks()] == ["ok"]


class TestReplace:
    """Wholesale replacement of roster and log."""

    def test_log_failure_restores_previous_roster(self, store):
        old = [make_task("old", "Old", "2024-01-01")]
        store.replace(old, {"2024-01-01": {"old"}})
        store.logs_path.unlink()
        store.logs_path.mkdir()

        with pytest.raises(StorageError):
            store.replace([make_task("new", "New", "2024-02-01")], {"2024-02-01": {"new"}})

        assert [t.id for t in store.load_tasks()] == ["old"]

    def test_log_failure_without_previous_roster_leaves_no_tasks_file(self, store):
        store.logs_path.mkdir(parents=True)

        with pytest.raises(StorageError):
            store.replace([make_task("new", "New", "2024-02-01")], {"2024-02-01": {"new"}})

        assert not store.tasks_path.exists()
        assert store.load_tasks() == []

    def test_replace_overwrites_both(self, store, sample_tasks, sample_log):
        store.replace(sample_tasks, sample_log)
        store.replace([make_task("new", "New", "2024-02-01")], {})
        assert [t.id for t in store.load_tasks()] == ["new"]
        assert store.load_log() == {}
