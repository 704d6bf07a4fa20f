"""
Pydantic models for project-related requests and responses.
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ProjectCreate(BaseModel):
    """Request model for creating a project."""
    title: str = Field("", description="Project title")
    description: str = Field("", description="Project description")

    @field_validator('title', 'description', mode='before')
    @classmethod
    def none_as_empty(cls, v: Optional[str]) -> str:
        """Treat JSON null the same as an absent field."""
        return "" if v is None else v


class ProjectUpdate(ProjectCreate):
    """Request model for replacing a project's title and description."""


class ProjectResponse(BaseModel):
    """Project response model."""
    id: int
    title: str
    description: str
    created_at: str
