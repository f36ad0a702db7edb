"""
Google Places API (New) text search client, paced with aiolimiter.
"""
import json
import time
from typing import Any, Dict, List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from restaurant_map.config import (
    LA_CENTER_LATITUDE,
    LA_CENTER_LONGITUDE,
    LOCATION_BIAS_RADIUS_METERS,
    PLACES_FIELD_MASK,
    PLACES_MAX_RATE,
    PLACES_TEXT_SEARCH_URL,
    QUERY_SUFFIX,
)
from restaurant_map.models import PlaceCandidate


class PlacesAPIError(Exception):
    """A text search request failed or returned an unusable payload."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


def build_text_query(name: str, neighborhood: str) -> str:
    return f"{name} {neighborhood} {QUERY_SUFFIX}"


def build_request_body(text_query: str) -> Dict[str, Any]:
    return {
        "textQuery": text_query,
        "locationBias": {
            "circle": {
                "center": {
                    "latitude": LA_CENTER_LATITUDE,
                    "longitude": LA_CENTER_LONGITUDE,
                },
                "radius": LOCATION_BIAS_RADIUS_METERS,
            },
        },
    }


def parse_places_response(data: Any) -> List[PlaceCandidate]:
    """
    Convert a searchText JSON payload into PlaceCandidate objects.

    A payload without "places" means zero results.

    Raises:
        PlacesAPIError: If the payload does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise PlacesAPIError(f"Unexpected response payload: {data!r}")

    places = data.get("places") or []
    if not isinstance(places, list):
        raise PlacesAPIError(f"Expected 'places' to be a list, got {type(places).__name__}")

    candidates = []
    for place in places:
        try:
            display_name = place["displayName"]["text"]
            formatted_address = place["formattedAddress"]
            place_id = place["id"]
        except (KeyError, TypeError) as e:
            raise PlacesAPIError(f"Failed to parse Google Places response: missing {e}") from e
        types = place.get("types") or []
        candidates.append(
            PlaceCandidate(
                id=str(place_id),
                display_name=str(display_name),
                formatted_address=str(formatted_address),
                types=[str(t) for t in types],
            )
        )
    return candidates


class PlacesClient:
    """
    Async client for the Places text search endpoint.
    Uses an AsyncLimiter to pace outgoing requests.
    """

    def __init__(self, api_key: str, url: str = PLACES_TEXT_SEARCH_URL):
        if not api_key:
            raise ValueError("A Google Places API key is required")
        self.api_key = api_key
        self.url = url
        self.rate_limiter = AsyncLimiter(max_rate=PLACES_MAX_RATE, time_period=1.0)
        self._session: Optional[ClientSession] = None

    async def __aenter__(self) -> "PlacesClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            # No timeout: the request blocks until the service answers
            self._session = ClientSession(timeout=ClientTimeout(total=None))
        return self._session

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Goog-Api-Key": self.api_key,
            "Content-Type": "application/json",
            "X-Goog-FieldMask": PLACES_FIELD_MASK,
        }

    async def search_text(self, text_query: str) -> List[PlaceCandidate]:
        """
        Run one text search biased towards Greater LA.

        Args:
            text_query: Free-text query, e.g. "Panda Inn Alhambra Los Angeles, CA".

        Returns:
            List[PlaceCandidate]: Places in the order the service ranked them.

        Raises:
            PlacesAPIError: On a non-2xx status, a transport failure or a malformed body.
        """
        start = time.perf_counter()
        logger.debug(f"▶️ START Places search for '{text_query}'")
        async with self.rate_limiter:
            session = await self._get_session()
            try:
                async with session.post(
                    self.url,
                    headers=self._headers(),
                    json=build_request_body(text_query),
                ) as resp:
                    if not 200 <= resp.status < 300:
                        error_text = await resp.text()
                        raise PlacesAPIError(
                            f"Google Places API error ({resp.status}): {resp.reason}. {error_text}",
                            status=resp.status,
                        )
                    data = await resp.json(content_type=None)
            except ClientError as e:
                logger.debug(f"⚠️ Places request failed for '{text_query}': {e}")
                raise PlacesAPIError(f"Google Places request failed: {e}") from e
            except json.JSONDecodeError as e:
                raise PlacesAPIError(f"Google Places returned invalid JSON: {e}") from e

        candidates = parse_places_response(data)
        duration = time.perf_counter() - start
        logger.debug(f"✅ Places search for '{text_query}' returned {len(candidates)} result(s) in {duration:.2f}s")
        return candidates

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
