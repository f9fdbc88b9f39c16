"""Entrypoint for the hypestats server and FastAPI application."""

import logging

import uvicorn

from hypestats.api.webserver import create_app
from hypestats.config.app_settings import get_app_settings

# Settings are validated at import, so the server refuses to start without MONGO_URL.
_APP_SETTINGS = get_app_settings()
# Required for uvicorn logging to be at all configurable: https://github.com/Kludex/uvicorn/issues/945#issuecomment-819692145
logging.basicConfig(level=_APP_SETTINGS.log_level)

fastapi_app = create_app(app_settings=_APP_SETTINGS)


if __name__ == "__main__":  # pragma: no cover
    uvicorn.run(
        "hypestats.api.main:fastapi_app",
        host=_APP_SETTINGS.host,
        port=_APP_SETTINGS.port,
        log_level=_APP_SETTINGS.log_level.lower(),
        workers=_APP_SETTINGS.workers,
    )
