"""
Pydantic models for task-related requests and responses.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TaskStatus(str, Enum):
    """Well-known task statuses. Other values are stored as given."""
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


DEFAULT_TASK_STATUS = TaskStatus.TODO.value


class TaskCreate(BaseModel):
    """
    Request model for creating a task.

    ``project_id`` is accepted for compatibility with clients that echo the
    whole task back, but the project id in the URL always wins.
    """
    title: str = Field("", description="Task title")
    description: str = Field("", description="Task description")
    status: str = Field("", description="To Do, In Progress or Done (defaults to To Do)")
    due_date: str = Field("", description="Optional due date (YYYY-MM-DD)")
    project_id: Optional[int] = Field(None, description="Ignored, taken from the URL")

    @field_validator('title', 'description', 'status', 'due_date', mode='before')
    @classmethod
    def none_as_empty(cls, v: Optional[str]) -> str:
        """Treat JSON null the same as an absent field."""
        return "" if v is None else v


class TaskUpdate(TaskCreate):
    """Request model for a partial task update: empty fields are left unchanged."""


class TaskResponse(BaseModel):
    """Task response model."""
    id: int
    title: str
    description: str
    status: str
    due_date: str
    project_id: int
    created_at: str
