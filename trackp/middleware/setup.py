"""
Middleware setup and configuration.
"""
from typing import List

from fastapi.middleware.cors import CORSMiddleware

from trackp.monitoring import MetricsMiddleware

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Origin", "Content-Type", "Accept", "Authorization"]


def setup_middleware(app, cors_origins: List[str]):
    """Set up all middleware for the FastAPI application."""
    # Metrics first so it wraps every request, CORS preflights included
    app.add_middleware(MetricsMiddleware)

    # Added last so it is outermost and answers preflight requests directly
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
