import logging
import sys
from datetime import tzinfo
from typing import Any, Literal

import yaml
from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hypestats.utils.constants import (
    DEFAULT_COLLECTION_NAME,
    DEFAULT_DAY_TIMEZONE,
    DEFAULT_DB_NAME,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    MASKED_SECRET,
    MONGO_URL_ENVVAR,
    SETTINGS_ENVVAR_PREFIX,
)
from hypestats.utils.date_utils import resolve_timezone
from hypestats.utils.exceptions import AppConfigException

_LOGGER = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """
    Pydantic settings class encapsulating the `hypestats` application config.
    Values are read from the environment (and an optional `.env` file), with any explicit
    init kwargs taking precedence. Every setting except `MONGO_URL` is prefixed with `HYPESTATS_`.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        env_prefix=SETTINGS_ENVVAR_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )
    mongo_url: SecretStr = Field(validation_alias=AliasChoices("mongo_url", MONGO_URL_ENVVAR))
    db_name: str = Field(default=DEFAULT_DB_NAME, min_length=1)
    collection_name: str = Field(default=DEFAULT_COLLECTION_NAME, min_length=1)
    day_timezone: str = Field(default=DEFAULT_DAY_TIMEZONE)
    server_selection_timeout_ms: int = Field(default=DEFAULT_SERVER_SELECTION_TIMEOUT_MS, gt=0)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: LogLevel = Field(default="INFO")
    workers: int = Field(default=1, ge=1)

    @field_validator("mongo_url")
    @classmethod
    def validate_mongo_url(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError(f"{MONGO_URL_ENVVAR} must be a non-empty connection string.")
        return value

    @field_validator("day_timezone")
    @classmethod
    def validate_day_timezone(cls, value: str) -> str:
        resolve_timezone(value)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def get_day_tzinfo(self) -> tzinfo:
        return resolve_timezone(self.day_timezone)

    def get_masked_dump(self) -> dict[str, Any]:
        """Returns the settings as a plain dict, with the connection string masked out."""
        dumped = self.model_dump()
        dumped["mongo_url"] = MASKED_SECRET
        return dumped

    def pretty_print_config(self) -> None:
        yaml.dump(self.get_masked_dump(), sys.stdout, sort_keys=False)


def get_app_settings(cli_overrides: dict[str, Any] | None = None) -> AppSettings:
    """
    Returns the read-only `hypestats` application settings configured by the environment plus any settings provided
    as options to the CLI. CLI options take precedence over the associated environment values.
    Raises an `AppConfigException` when the settings are missing or invalid, e.g. when `MONGO_URL` is not set.
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    try:
        app_settings = AppSettings(**overrides)
    except ValidationError as ve:
        _LOGGER.error(f"Invalid app config. Validation errors: {ve.errors(include_url=False, include_input=False)}")
        raise AppConfigException(
            f"Invalid hypestats config settings. The {MONGO_URL_ENVVAR} environment variable is required."
        ) from ve
    return app_settings
