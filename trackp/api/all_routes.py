"""
All REST routes, mounted under /api.
"""
from fastapi import APIRouter

from trackp.api.routes import projects, tasks

router = APIRouter(prefix="/api")
router.include_router(projects.router)
router.include_router(tasks.router)
