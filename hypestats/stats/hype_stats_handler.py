from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from bson.errors import BSONError
from fastapi.encoders import jsonable_encoder
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from hypestats.db.db_utils import open_hype_stats_collection
from hypestats.utils.constants import TIMESTAMP_FIELD
from hypestats.utils.date_utils import start_of_day, to_js_iso_string
from hypestats.utils.exceptions import StatsSerializationException, StoreQueryException

if TYPE_CHECKING:
    from hypestats.config.app_settings import AppSettings
    from hypestats.db.db_utils import MongoClientFactory

_LOGGER = logging.getLogger(__name__)


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


# NaN and +/-Infinity become null, as JSON.stringify does.
_BSON_ENCODERS: dict[Any, Callable[[Any], Any]] = {ObjectId: str, datetime: to_js_iso_string, float: _finite_or_none}


def serialize_stats(records: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Converts raw hype stats documents into JSON-compatible dicts. Field names and values are passed through as-is,
    except for ObjectIds (hex strings), datetimes (ISO-8601 UTC strings with millisecond precision)
    and non-finite floats (null).
    """
    try:
        encoded = jsonable_encoder(list(records), custom_encoder=_BSON_ENCODERS)
        json.dumps(encoded, allow_nan=False)
    except (TypeError, ValueError) as ex:
        raise StatsSerializationException("Unable to encode hype stats records as JSON.") from ex
    return encoded


class HypeStatsQueryHandler:
    """
    Read-only query wrapper which fetches every hype stats record timestamped within the current day,
    sorted ascending by timestamp. A new MongoDB connection is opened and released for every fetch.

    :param app_settings: The hypestats settings, providing the connection string, db / collection names and day time zone.
    :param client_factory: Callable used to construct the MongoClient. Defaults to `pymongo.MongoClient`.
    :param clock: Callable returning the current time. Defaults to the current UTC time.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        client_factory: MongoClientFactory = MongoClient,
        clock: Callable[[], datetime] | None = None,
    ):
        self._app_settings = app_settings
        self._client_factory = client_factory
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._day_tz = app_settings.get_day_tzinfo()

    def start_of_day(self, now: datetime | None = None) -> datetime:
        """Returns midnight of the current day in the configured day time zone, as a tz-aware datetime."""
        return start_of_day(now=now if now is not None else self._clock(), tz=self._day_tz)

    def fetch_todays_stats(self) -> list[dict[str, Any]]:
        """
        Returns the raw documents with `timestamp >= start of today`, sorted ascending by `timestamp`.
        Raises a `StoreConnectionException` or `StoreQueryException` on store failures.
        """
        since = self.start_of_day()
        _LOGGER.debug(f"Fetching hype stats with {TIMESTAMP_FIELD} >= {since.isoformat()} ...")
        with open_hype_stats_collection(app_settings=self._app_settings, client_factory=self._client_factory) as coll:
            try:
                records = list(coll.find({TIMESTAMP_FIELD: {"$gte": since}}).sort(TIMESTAMP_FIELD, ASCENDING))
            except (PyMongoError, BSONError) as ex:
                raise StoreQueryException(f"Query against '{coll.full_name}' failed.") from ex
        _LOGGER.debug(f"Fetched {len(records)} hype stats records.")
        return records

    def fetch_todays_stats_json(self) -> list[dict[str, Any]]:
        """Same as `fetch_todays_stats`, but returns JSON-compatible records ready for the response body."""
        return serialize_stats(self.fetch_todays_stats())
