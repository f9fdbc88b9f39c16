"""
Collection of resources spanning the full FastAPI lifespan.

These are NOT FastAPI dependencies, as those are scoped-per request. For more, see link below:
https://fastapi.tiangolo.com/advanced/events/

Note that no MongoClient lives here: each request opens and closes its own connection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pymongo import MongoClient

from hypestats.stats.hype_stats_handler import HypeStatsQueryHandler
from hypestats.version import get_project_version

if TYPE_CHECKING:
    from hypestats.config.app_settings import AppSettings
    from hypestats.db.db_utils import MongoClientFactory


@dataclass(frozen=True)
class LifespanResources:
    """Wrapper class for any objects which live for the whole lifespan of the app, exposed as attributes."""

    app_settings: AppSettings
    hype_stats_handler: HypeStatsQueryHandler
    project_version: str


def get_lifespan_resources(
    app_settings: AppSettings, client_factory: MongoClientFactory = MongoClient, project_version: str | None = None
) -> LifespanResources:
    """
    The only function that FastAPI logic should call to build the lifespan resources.
    The project version is read from pyproject.toml unless the caller already has it.
    """
    return LifespanResources(
        app_settings=app_settings,
        hype_stats_handler=HypeStatsQueryHandler(app_settings=app_settings, client_factory=client_factory),
        project_version=project_version if project_version is not None else get_project_version(),
    )
