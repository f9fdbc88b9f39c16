import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pymongo import MongoClient

from hypestats.api.api_routes import hypestats_api_router
from hypestats.api.lifespan_resources import get_lifespan_resources
from hypestats.config.app_settings import AppSettings
from hypestats.db.db_utils import MongoClientFactory
from hypestats.version import get_project_version

_LOGGER = logging.getLogger(__name__)


def create_app(app_settings: AppSettings, client_factory: MongoClientFactory = MongoClient) -> FastAPI:
    """Builds the FastAPI app around the given, already-validated settings."""
    project_version = get_project_version()

    # Set up some application state stuff
    @asynccontextmanager
    async def _app_lifespan(app: FastAPI):
        # Startup events: Initialize stuff
        _LOGGER.info("Running fastapi app lifespan startup ...")
        resources = get_lifespan_resources(
            app_settings=app_settings, client_factory=client_factory, project_version=project_version
        )
        app.state.lifespan_resources = resources
        # https://github.com/fastapi/fastapi/discussions/9664#discussioncomment-11170662
        yield {"lifespan_resources": resources}
        # Shutdown events: Clean up stuff
        _LOGGER.info("Server shutting down ...")

    app = FastAPI(title="hypestats", version=project_version, lifespan=_app_lifespan)
    app.include_router(hypestats_api_router)
    return app
