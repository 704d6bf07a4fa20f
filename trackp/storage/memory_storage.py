"""
In-memory implementation of storage interface.
State lives for the lifetime of the process only.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any

from trackp.exceptions import NotFoundError
from trackp.models.task_models import DEFAULT_TASK_STATUS
from .interface import StorageInterface
from .locking import ReadWriteLock
from .timestamps import now_timestamp

logger = logging.getLogger(__name__)


@dataclass
class _State:
    """Everything the store owns, guarded as one unit by a single lock."""
    projects: List[Dict[str, Any]] = field(default_factory=list)
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    next_project_id: int = 1
    next_task_id: int = 1


class MemoryStorage(StorageInterface):
    """
    Process-local storage.

    New records are prepended so both sequences are kept newest first.
    Callers always receive copies; the stored dictionaries never escape
    the lock.
    """

    name = "memory"

    def __init__(self):
        self._state = _State()
        self._lock = ReadWriteLock()

    def _find_project(self, project_id: int) -> Dict[str, Any]:
        for project in self._state.projects:
            if project["id"] == project_id:
                return project
        raise NotFoundError("Project not found")

    def _find_task(self, task_id: int) -> Dict[str, Any]:
        for task in self._state.tasks:
            if task["id"] == task_id:
                return task
        raise NotFoundError("Task not found")

    # Project operations
    def list_projects(self) -> List[Dict[str, Any]]:
        with self._lock.read():
            return [dict(p) for p in self._state.projects]

    def create_project(self, title: str, description: str) -> Dict[str, Any]:
        with self._lock.write():
            project = {
                "id": self._state.next_project_id,
                "title": title,
                "description": description,
                "created_at": now_timestamp(),
            }
            self._state.projects.insert(0, project)
            self._state.next_project_id += 1
            logger.info(f"Created project {project['id']}: {title}")
            return dict(project)

    def get_project(self, project_id: int) -> Dict[str, Any]:
        with self._lock.read():
            return dict(self._find_project(project_id))

    def update_project(self, project_id: int, title: str, description: str) -> Dict[str, Any]:
        with self._lock.write():
            project = self._find_project(project_id)
            project["title"] = title
            project["description"] = description
            return dict(project)

    def delete_project(self, project_id: int) -> None:
        with self._lock.write():
            before = len(self._state.projects)
            self._state.projects = [p for p in self._state.projects if p["id"] != project_id]
            if len(self._state.projects) == before:
                logger.debug(f"Delete of unknown project {project_id} ignored")
                return
            remaining = [t for t in self._state.tasks if t["project_id"] != project_id]
            removed = len(self._state.tasks) - len(remaining)
            self._state.tasks = remaining
            logger.info(f"Deleted project {project_id} and {removed} task(s)")

    # Task operations
    def list_project_tasks(self, project_id: int) -> List[Dict[str, Any]]:
        with self._lock.read():
            return [dict(t) for t in self._state.tasks if t["project_id"] == project_id]

    def create_task(
        self,
        project_id: int,
        title: str,
        description: str = "",
        status: str = "",
        due_date: str = ""
    ) -> Dict[str, Any]:
        with self._lock.write():
            self._find_project(project_id)
            task = {
                "id": self._state.next_task_id,
                "title": title,
                "description": description,
                "status": status or DEFAULT_TASK_STATUS,
                "due_date": due_date,
                "project_id": project_id,
                "created_at": now_timestamp(),
            }
            self._state.tasks.insert(0, task)
            self._state.next_task_id += 1
            logger.info(f"Created task {task['id']} in project {project_id}: {title}")
            return dict(task)

    def update_task(
        self,
        task_id: int,
        title: str = "",
        description: str = "",
        status: str = "",
        due_date: str = ""
    ) -> Dict[str, Any]:
        with self._lock.write():
            task = self._find_task(task_id)
            changes = {
                "title": title,
                "description": description,
                "status": status,
                "due_date": due_date,
            }
            task.update({key: value for key, value in changes.items() if value})
            return dict(task)

    def delete_task(self, task_id: int) -> None:
        with self._lock.write():
            task = self._find_task(task_id)
            self._state.tasks.remove(task)
            logger.info(f"Deleted task {task_id}")
