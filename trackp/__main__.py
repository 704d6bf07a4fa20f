"""
TrackP Service - REST API for project and task tracking.

Main entry point. All initialization logic is in app/factory.py.
"""
import logging
from dataclasses import replace

import click
import uvicorn

from trackp.app import create_app
from trackp.config import STORE_MEMORY, STORE_SQL, load_settings

logger = logging.getLogger("trackp")


@click.command()
@click.option("--store", type=click.Choice([STORE_MEMORY, STORE_SQL]), help="Storage backend (default: TRACKP_STORE or memory)")
@click.option("--host", help="Bind address (default: TRACKP_HOST or 0.0.0.0)")
@click.option("--port", type=int, help="Port (default: TRACKP_PORT or 8080)")
@click.option("--demo", is_flag=True, help="Load sample projects and tasks into an empty store")
def cli(store, host, port, demo):
    """TrackP: project and task tracking REST service."""
    try:
        settings = load_settings()
    except ValueError as e:
        raise click.BadParameter(str(e))

    overrides = {
        "store": store,
        "host": host,
        "port": port,
        "demo_data": True if demo else None,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    try:
        app = create_app(settings)
    except Exception:
        logger.critical("Failed to initialize storage, exiting", exc_info=True)
        raise click.exceptions.Exit(1)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30,
    )
    server = uvicorn.Server(config)

    logger.info(f"Server starting on {settings.host}:{settings.port}")
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        # Storage cleanup is handled by the lifespan hook in app/factory.py
        logger.info("Service stopped")


def main():
    cli()


if __name__ == "__main__":
    main()
