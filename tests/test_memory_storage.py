"""
Tests specific to the in-memory store: copies and concurrent access.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from trackp.exceptions import NotFoundError
from trackp.storage import MemoryStorage


@pytest.fixture
def store():
    """Create an empty in-memory store."""
    return MemoryStorage()


class TestIsolation:
    """Callers never get references to stored records."""

    def test_mutating_result_does_not_change_store(self, store):
        """Editing a returned project leaves the stored one alone."""
        project = store.create_project("P1", "D1")
        project["title"] = "changed"
        store.list_projects()[0]["title"] = "changed again"
        assert store.get_project(project["id"])["title"] == "P1"

    def test_mutating_task_result_does_not_change_store(self, store):
        """Editing a returned task leaves the stored one alone."""
        project = store.create_project("P1", "")
        task = store.create_task(project["id"], "T1")
        task["status"] = "Done"
        assert store.list_project_tasks(project["id"])[0]["status"] == "To Do"


class TestConcurrency:
    """Writes are serialized by the store's lock."""

    def test_concurrent_creates_get_unique_ids(self, store):
        """Parallel creates never hand out the same ID twice."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            projects = list(pool.map(lambda i: store.create_project(f"P{i}", ""), range(100)))
        assert sorted(p["id"] for p in projects) == list(range(1, 101))

    def test_cascade_is_atomic_with_task_creation(self, store):
        """After a delete races with task creates, no task outlives its project."""
        project = store.create_project("P1", "")

        def add_task(i):
            try:
                store.create_task(project["id"], f"T{i}")
            except NotFoundError:
                pass

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(add_task, i) for i in range(50)]
            pool.submit(store.delete_project, project["id"])
            for future in futures:
                future.result()

        assert store.list_project_tasks(project["id"]) == []
