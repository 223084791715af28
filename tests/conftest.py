#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- An isolated working directory for every test that touches disk
- Sample rosters and completion logs with fixed dates
- Helpers for writing corrupted state files
"""

import os
import sys
import tempfile
import shutil
from datetime import datetime, timezone
from typing import Generator, List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from relentless.core.models import Task
from relentless.core.paths import set_path_manager


UTC = timezone.utc


def make_task(task_id: str, title: str, created: str, archived: bool = False) -> Task:
    """Task created at noon UTC on the given YYYY-MM-DD day."""
    created_at = datetime.strptime(created, "%Y-%m-%d").replace(hour=12, tzinfo=UTC)
    return Task(id=task_id, title=title, created_at=created_at, archived=archived)


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test isolation."""
    temp_path = tempfile.mkdtemp(prefix="relentless_test_")
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def isolated_home(temp_dir: str, monkeypatch) -> Generator[str, None, None]:
    """Point RELENTLESS_HOME at a temp dir and reset the global PathManager."""
    monkeypatch.setenv("RELENTLESS_HOME", temp_dir)
    set_path_manager(None)
    try:
        yield temp_dir
    finally:
        set_path_manager(None)


@pytest.fixture
def sample_tasks() -> List[Task]:
    """Three protocols created on different days, one archived."""
    return [
        make_task("task-run", "Run", "2024-03-01"),
        make_task("task-read", "Read", "2024-03-05"),
        make_task("task-old", "Old habit", "2024-02-01", archived=True),
    ]


@pytest.fixture
def sample_log():
    """Completions across early March 2024."""
    return {
        "2024-03-01": {"task-run"},
        "2024-03-02": {"task-run"},
        "2024-03-03": {"task-run"},
        "2024-03-05": {"task-run", "task-read"},
        "2024-03-06": {"task-read"},
    }


# Helper functions for tests

def create_corrupted_json_file(file_path: str) -> None:
    """Create a corrupted JSON file for testing error handling."""
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    with open(file_path, 'w') as f:
        f.write('{"incomplete": "json file without closing brace"')
