"""
Pydantic models for request/response validation.
"""
from .project_models import ProjectCreate, ProjectUpdate, ProjectResponse
from .task_models import TaskCreate, TaskUpdate, TaskResponse, TaskStatus, DEFAULT_TASK_STATUS

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskStatus",
    "DEFAULT_TASK_STATUS",
]
