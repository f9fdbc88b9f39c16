import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from hypestats.api.constants import API_ROUTES_PREFIX, Endpoint
from hypestats.utils.constants import FETCH_ERROR_MSG
from hypestats.utils.exceptions import HypeStatsFetchException

_LOGGER = logging.getLogger(__name__)
hypestats_api_router = APIRouter(prefix=API_ROUTES_PREFIX)


# /api/healthcheck
@hypestats_api_router.get(Endpoint.HEALTHCHECK.value.rel_path)
async def healthcheck_endpoint(request: Request) -> JSONResponse:
    return JSONResponse(content={"version": request.state.lifespan_resources.project_version}, status_code=200)


# /api/hype_stats
# Sync def: FastAPI runs this in its threadpool, so the blocking pymongo calls don't stall the event loop.
@hypestats_api_router.get(Endpoint.HYPE_STATS.value.rel_path)
def hype_stats_endpoint(request: Request) -> JSONResponse:
    try:
        records = request.state.lifespan_resources.hype_stats_handler.fetch_todays_stats_json()
    except HypeStatsFetchException:
        _LOGGER.error(f"GET {Endpoint.HYPE_STATS.value.full_path} failed: {FETCH_ERROR_MSG}", exc_info=True)
        return JSONResponse(content={"error": FETCH_ERROR_MSG}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    _LOGGER.debug(f"GET {Endpoint.HYPE_STATS.value.full_path} returning {len(records)} records.")
    return JSONResponse(content=records, status_code=status.HTTP_200_OK)
