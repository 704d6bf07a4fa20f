"""
Project-related API routes.
"""
from typing import List, Dict
from fastapi import APIRouter, Depends

from trackp.dependencies.path_ids import get_project_id
from trackp.dependencies.services import get_store
from trackp.models.project_models import ProjectCreate, ProjectUpdate, ProjectResponse
from trackp.storage import StorageInterface

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectResponse])
def list_projects(store: StorageInterface = Depends(get_store)):
    """List all projects, newest first."""
    return [ProjectResponse(**project) for project in store.list_projects()]


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(project: ProjectCreate, store: StorageInterface = Depends(get_store)):
    """Create a new project."""
    created = store.create_project(title=project.title, description=project.description)
    return ProjectResponse(**created)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int = Depends(get_project_id),
    store: StorageInterface = Depends(get_store)
):
    """Get a project by ID."""
    return ProjectResponse(**store.get_project(project_id))


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project: ProjectUpdate,
    project_id: int = Depends(get_project_id),
    store: StorageInterface = Depends(get_store)
):
    """Replace a project's title and description. ID and created_at are kept."""
    updated = store.update_project(project_id, title=project.title, description=project.description)
    return ProjectResponse(**updated)


@router.delete("/{project_id}")
def delete_project(
    project_id: int = Depends(get_project_id),
    store: StorageInterface = Depends(get_store)
) -> Dict[str, str]:
    """
    Delete a project and all of its tasks.

    Deleting a project that does not exist still succeeds.
    """
    store.delete_project(project_id)
    return {"message": "Project deleted successfully"}
