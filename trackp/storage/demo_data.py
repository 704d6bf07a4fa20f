"""
Sample projects and tasks for trying the service out.
"""
import logging

from .interface import StorageInterface

logger = logging.getLogger(__name__)

DEMO_PROJECTS = [
    {
        "title": "Sample Project",
        "description": "This is a sample project to get you started with TrackP",
        "tasks": [
            ("Set up development environment", "Install all necessary tools and dependencies", "Done"),
            ("Create database schema", "Design and implement the database structure", "Done"),
            ("Implement user interface", "Build the React frontend components", "In Progress"),
            ("API development", "Create RESTful API endpoints", "To Do"),
        ],
    },
    {
        "title": "Website Redesign",
        "description": "Complete redesign of the company website with modern UI/UX",
        "tasks": [
            ("Research design trends", "Look into current web design trends and best practices", "To Do"),
            ("Create wireframes", "Design the layout and structure of new pages", "To Do"),
        ],
    },
]


def seed_demo_data(store: StorageInterface) -> bool:
    """
    Load the sample data into an empty store.

    Returns:
        True if data was loaded, False if the store already had projects.
    """
    if not store.is_empty():
        logger.info("Store already has projects, skipping demo data")
        return False

    for entry in DEMO_PROJECTS:
        project = store.create_project(entry["title"], entry["description"])
        for title, description, status in entry["tasks"]:
            store.create_task(project["id"], title, description=description, status=status)

    logger.info(f"Loaded {len(DEMO_PROJECTS)} demo projects")
    return True
