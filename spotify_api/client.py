"""Client for the Spotify listening-statistics endpoints"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from config.display import TimeRange
from settings import API_BASE, CONNECT_TIMEOUT, REQUEST_TIMEOUT
from spotify_oauth.errors import ApiError, MalformedResponseError, NetworkError
from .models import Artist, TopArtistsResponse, TopTracksResponse, Track

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class SpotifyClient:
    """Fetches a user's top artists and tracks

    Use as an async context manager so the underlying connection pool is
    closed:

        async with SpotifyClient(token, TimeRange.MEDIUM) as client:
            tracks = await client.fetch_top_tracks(10)
    """

    def __init__(
        self,
        access_token: str,
        time_range: TimeRange = TimeRange.MEDIUM,
        base_url: str = API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.time_range = time_range
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            transport=transport,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
        )

    async def __aenter__(self) -> "SpotifyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_top_artists(self, limit: int) -> List[Artist]:
        """Get the user's top artists for the configured time range"""
        response = await self._get_top("artists", limit, TopArtistsResponse)
        return response.items

    async def fetch_top_tracks(self, limit: int) -> List[Track]:
        """Get the user's top tracks for the configured time range"""
        response = await self._get_top("tracks", limit, TopTracksResponse)
        return response.items

    async def _get_top(self, kind: str, limit: int, model: Type[ResponseModel]) -> ResponseModel:
        url = f"{self.base_url}/me/top/{kind}"
        params: Dict[str, Any] = {"time_range": self.time_range.api_value, "limit": limit}

        logger.debug(f"GET {url} params={params}")
        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.error(f"Top {kind} request failed with status {response.status_code}")
            raise ApiError(response.status_code, response.text)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Unexpected top {kind} response: {e}") from e
