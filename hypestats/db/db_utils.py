from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC
from typing import TYPE_CHECKING, Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from hypestats.utils.exceptions import StoreConnectionException

if TYPE_CHECKING:
    from pymongo.collection import Collection

    from hypestats.config.app_settings import AppSettings

_LOGGER = logging.getLogger(__name__)

MongoClientFactory = Callable[..., MongoClient]


def create_mongo_client(app_settings: AppSettings, client_factory: MongoClientFactory = MongoClient) -> MongoClient:
    """
    Builds a new MongoClient, scoped to a single request, from the configured connection string.
    Datetimes are decoded as tz-aware UTC values.
    """
    return client_factory(
        app_settings.mongo_url.get_secret_value(),
        tz_aware=True,
        tzinfo=UTC,
        serverSelectionTimeoutMS=app_settings.server_selection_timeout_ms,
    )


@contextmanager
def open_hype_stats_collection(
    app_settings: AppSettings, client_factory: MongoClientFactory = MongoClient
) -> Iterator[Collection[dict[str, Any]]]:
    """
    Opens a MongoClient, verifies the server is reachable, and yields the configured hype stats collection.
    The client is always closed on exit, whether or not the caller raised.
    Raises a `StoreConnectionException` if the client cannot be created or the server cannot be reached.
    """
    try:
        client = create_mongo_client(app_settings=app_settings, client_factory=client_factory)
    except PyMongoError as ex:
        raise StoreConnectionException("Unable to create MongoClient from the configured connection string.") from ex
    try:
        _LOGGER.debug("Pinging MongoDB server ...")
        try:
            client.admin.command("ping")
        except PyMongoError as ex:
            raise StoreConnectionException("Unable to reach the MongoDB server.") from ex
        yield client[app_settings.db_name][app_settings.collection_name]
    finally:
        _LOGGER.debug("Closing MongoClient ...")
        client.close()
