"""Geographic resolution and distance scoring: geocoder contract, Haversine, location score."""

import inspect
import math
from abc import ABC, abstractmethod
from typing import Awaitable, Optional, Union

from job_match_ai.config import DEFAULT_MAX_DISTANCE_KM, EARTH_RADIUS_KM, KM_TO_MILES
from job_match_ai.schemas.candidate_profile import CandidateProfile
from job_match_ai.schemas.coordinates import Coordinates
from job_match_ai.schemas.job_posting import JobPosting
from job_match_ai.utils.errors import GeocodingUnavailable
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

GeocodeResult = Union[Optional[Coordinates], Awaitable[Optional[Coordinates]]]


class Geocoder(ABC):
    """External address -> coordinates collaborator. May be sync or async."""

    @abstractmethod
    def geocode(self, address: str) -> GeocodeResult:
        """Return Coordinates, None when not found, or an awaitable of either."""
        ...


class GeoResolver:
    """Resolves location text through a Geocoder. Holds no state of its own."""

    def __init__(self, geocoder: Geocoder) -> None:
        self._geocoder = geocoder

    async def resolve(self, location_text: Optional[str]) -> Optional[Coordinates]:
        """Geocode a location string; None when blank, unknown, or the geocoder is unavailable."""
        text = (location_text or "").strip()
        if not text:
            return None
        try:
            result = self._geocoder.geocode(text)
            if inspect.isawaitable(result):
                result = await result
        except GeocodingUnavailable as e:
            logger.warning("Geocoder unavailable for %r: %s", text, e)
            return None
        if result is None:
            logger.debug("Could not geocode location: %s", text)
        return result

    async def coordinates_for(
        self, record: Union[JobPosting, CandidateProfile]
    ) -> Optional[Coordinates]:
        """Stored coordinates when present, else geocode the record's location text."""
        if record.coordinates is not None:
            return record.coordinates
        return await self.resolve(record.location)


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in km (Haversine, R = 6371 km)."""
    lat1 = math.radians(a.latitude)
    lon1 = math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    lon2 = math.radians(b.longitude)
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    h = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) * math.sin(d_lon / 2)
    )
    h = min(1.0, h)  # rounding can push near-antipodal points past 1
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def location_score(distance: float, max_distance_km: float = DEFAULT_MAX_DISTANCE_KM) -> float:
    """1.0 at zero distance, linear decay to 0.0 at max_distance_km and beyond."""
    if distance <= 0:
        return 1.0
    if distance >= max_distance_km:
        return 0.0
    return 1.0 - (distance / max_distance_km)


def kilometers_to_miles(kilometers: float) -> float:
    return kilometers * KM_TO_MILES
