from typing import Final

DEFAULT_DB_NAME: Final[str] = "twitch_hype_bot"
DEFAULT_COLLECTION_NAME: Final[str] = "hype_stats"
DEFAULT_DAY_TIMEZONE: Final[str] = "UTC"
# pymongo's own default for serverSelectionTimeoutMS
DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 30_000

MONGO_URL_ENVVAR: Final[str] = "MONGO_URL"
SETTINGS_ENVVAR_PREFIX: Final[str] = "HYPESTATS_"

TIMESTAMP_FIELD: Final[str] = "timestamp"
ID_FIELD: Final[str] = "_id"

FETCH_ERROR_MSG: Final[str] = "Failed to fetch hype stats"
MASKED_SECRET: Final[str] = "**********"
