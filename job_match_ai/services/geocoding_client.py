"""Geocoding collaborators: offline known-location table and async Nominatim HTTP client."""

import asyncio
from typing import Dict, Optional, Tuple

import httpx

from job_match_ai.config import (
    GEOCODER_MAX_RETRIES,
    GEOCODER_PROVIDER,
    GEOCODER_TIMEOUT_SECONDS,
    GEOCODER_USER_AGENT,
    KNOWN_LOCATIONS,
    NOMINATIM_URL,
)
from job_match_ai.schemas.coordinates import Coordinates
from job_match_ai.services.geo_service import Geocoder
from job_match_ai.utils.errors import GeocodingUnavailable
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


class KnownLocationGeocoder(Geocoder):
    """
    Offline lookup against a fixed city table.
    Exact key first, then substring match in either direction ("Central London" -> london).
    """

    def __init__(self, locations: Optional[Dict[str, Tuple[float, float]]] = None) -> None:
        table = KNOWN_LOCATIONS if locations is None else locations
        self._locations = {
            name.strip().lower(): Coordinates(latitude=lat, longitude=lon)
            for name, (lat, lon) in table.items()
        }

    def geocode(self, address: str) -> Optional[Coordinates]:
        key = (address or "").strip().lower()
        if not key:
            return None
        if key in self._locations:
            return self._locations[key]
        for name, coords in self._locations.items():
            if name in key or key in name:
                return coords
        logger.debug("Could not geocode address: %s", address)
        return None


class NominatimGeocoder(Geocoder):
    """
    OpenStreetMap Nominatim search client. Retries transient failures with backoff;
    raises GeocodingUnavailable once attempts are exhausted.
    """

    def __init__(
        self,
        base_url: str = NOMINATIM_URL,
        user_agent: str = GEOCODER_USER_AGENT,
        timeout: float = GEOCODER_TIMEOUT_SECONDS,
        max_retries: int = GEOCODER_MAX_RETRIES,
        backoff_seconds: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._user_agent = user_agent
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._backoff_seconds = backoff_seconds
        self._transport = transport

    async def geocode(self, address: str) -> Optional[Coordinates]:
        query = (address or "").strip()
        if not query:
            return None
        last_error: Optional[Exception] = None
        for attempt in range(self._max_retries):
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    headers={"User-Agent": self._user_agent, "Accept": "application/json"},
                    transport=self._transport,
                ) as client:
                    response = await client.get(
                        self._base_url,
                        params={"q": query, "format": "json", "limit": 1},
                    )
                    response.raise_for_status()
                    try:
                        payload = response.json()
                    except ValueError as e:
                        raise GeocodingUnavailable(f"Non-JSON geocoder response for {query!r}: {e}") from e
                    return self._parse(payload, query)
            except httpx.HTTPStatusError as e:
                last_error = e
                logger.warning("Geocoder HTTP error %s for %r", e.response.status_code, query)
                if 400 <= e.response.status_code < 500:
                    break  # Don't retry client errors
            except httpx.TransportError as e:
                last_error = e
                logger.warning("Geocoder request failed for %r (attempt %s): %s", query, attempt + 1, e)
            if attempt + 1 < self._max_retries:
                await asyncio.sleep(self._backoff_seconds * (attempt + 1))  # Backoff
        raise GeocodingUnavailable(f"Geocoding failed for {query!r}: {last_error}")

    @staticmethod
    def _parse(payload, query: str) -> Optional[Coordinates]:
        if not payload:
            logger.debug("Could not geocode address: %s", query)
            return None
        try:
            first = payload[0]
            return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeocodingUnavailable(f"Malformed geocoder response for {query!r}: {e}") from e


def get_geocoder(provider: str | None = None) -> Geocoder:
    """
    Return the configured geocoder (dependency injection).
    provider: override config; None uses GEOCODER_PROVIDER.
    """
    p = (provider or GEOCODER_PROVIDER).strip().lower()
    if p == "nominatim":
        return NominatimGeocoder()
    if p != "known_locations":
        logger.warning("Unknown geocoder provider %r; falling back to known_locations", p)
    return KnownLocationGeocoder()
