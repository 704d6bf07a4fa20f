"""
Storage interface - defines the contract for all storage backends.
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


class StorageInterface(ABC):
    """
    Abstract interface for storage operations.

    Projects and tasks are plain dictionaries shaped like
    ``ProjectResponse`` and ``TaskResponse``. Lookups of a missing id raise
    ``NotFoundError`` except ``delete_project``, which is a no-op.
    """

    name = "abstract"

    # Project operations
    @abstractmethod
    def list_projects(self) -> List[Dict[str, Any]]:
        """List all projects, newest first."""
        pass

    @abstractmethod
    def create_project(self, title: str, description: str) -> Dict[str, Any]:
        """Create a project and return it."""
        pass

    @abstractmethod
    def get_project(self, project_id: int) -> Dict[str, Any]:
        """Get a project by ID."""
        pass

    @abstractmethod
    def update_project(self, project_id: int, title: str, description: str) -> Dict[str, Any]:
        """Replace a project's title and description."""
        pass

    @abstractmethod
    def delete_project(self, project_id: int) -> None:
        """Delete a project and all of its tasks."""
        pass

    # Task operations
    @abstractmethod
    def list_project_tasks(self, project_id: int) -> List[Dict[str, Any]]:
        """List a project's tasks, newest first."""
        pass

    @abstractmethod
    def create_task(
        self,
        project_id: int,
        title: str,
        description: str = "",
        status: str = "",
        due_date: str = ""
    ) -> Dict[str, Any]:
        """Create a task under a project and return it."""
        pass

    @abstractmethod
    def update_task(
        self,
        task_id: int,
        title: str = "",
        description: str = "",
        status: str = "",
        due_date: str = ""
    ) -> Dict[str, Any]:
        """Overwrite the non-empty fields of a task and return it."""
        pass

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        """Delete a task."""
        pass

    # Lifecycle
    def health(self) -> Dict[str, Any]:
        """Report backend health for the /health endpoint."""
        return {"status": "healthy", "type": self.name}

    def close(self) -> None:
        """Release any resources held by the backend."""
        pass

    def is_empty(self) -> bool:
        """True when no projects are stored."""
        return not self.list_projects()
