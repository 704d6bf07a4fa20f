"""
Task-related API routes.
Tasks are listed and created under their project, and updated or deleted
by their own ID.
"""
from typing import List, Dict
from fastapi import APIRouter, Depends

from trackp.dependencies.path_ids import get_project_id, get_task_id
from trackp.dependencies.services import get_store
from trackp.models.task_models import TaskCreate, TaskUpdate, TaskResponse
from trackp.storage import StorageInterface

router = APIRouter(tags=["tasks"])


@router.get("/projects/{project_id}/tasks", response_model=List[TaskResponse])
def list_project_tasks(
    project_id: int = Depends(get_project_id),
    store: StorageInterface = Depends(get_store)
):
    """List a project's tasks, newest first. Unknown projects have no tasks."""
    return [TaskResponse(**task) for task in store.list_project_tasks(project_id)]


@router.post("/projects/{project_id}/tasks", response_model=TaskResponse, status_code=201)
def create_task(
    task: TaskCreate,
    project_id: int = Depends(get_project_id),
    store: StorageInterface = Depends(get_store)
):
    """Create a task in a project. The project ID in the body is ignored."""
    created = store.create_task(
        project_id,
        title=task.title,
        description=task.description,
        status=task.status,
        due_date=task.due_date
    )
    return TaskResponse(**created)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task: TaskUpdate,
    task_id: int = Depends(get_task_id),
    store: StorageInterface = Depends(get_store)
):
    """Update a task. Only non-empty fields overwrite the stored values."""
    updated = store.update_task(
        task_id,
        title=task.title,
        description=task.description,
        status=task.status,
        due_date=task.due_date
    )
    return TaskResponse(**updated)


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: int = Depends(get_task_id),
    store: StorageInterface = Depends(get_store)
) -> Dict[str, str]:
    """Delete a task. Unlike projects, deleting an unknown task is a 404."""
    store.delete_task(task_id)
    return {"message": "Task deleted successfully"}
