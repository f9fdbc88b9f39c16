from __future__ import annotations

import os
from enum import Enum
from typing import Final, NamedTuple

API_ROUTES_PREFIX: Final[str] = "/api"


class RoutePath(NamedTuple):
    """
    Class for describing a particular FastAPI endpoint in a way that it may be referenced by
    both the internal FastAPI decorators and by absolute endpoint paths consistently.

    :param: rel_path (str):  The relative endpoint path, without the fastapi_prefix.
        This is what is passed to the fastapi decorators.
    :param: api_prefix (str): The FastAPI app prefix which the endpoint lives under.
    """

    rel_path: str
    api_prefix: str

    @property
    def full_path(self) -> str:
        """The full endpoint path, including the fastapi_prefix."""
        return os.path.join(self.api_prefix, self.rel_path.removeprefix("/"))


class Endpoint(Enum):
    # /api/healthcheck
    HEALTHCHECK = RoutePath(rel_path="/healthcheck", api_prefix=API_ROUTES_PREFIX)
    # /api/hype_stats
    HYPE_STATS = RoutePath(rel_path="/hype_stats", api_prefix=API_ROUTES_PREFIX)
