"""Service exports."""

from .filter_service import filter_by_proximity
from .geo_service import GeoResolver, Geocoder, distance_km, kilometers_to_miles, location_score
from .geocoding_client import KnownLocationGeocoder, NominatimGeocoder, get_geocoder
from .keyword_extractor import extract_keywords, keyword_overlap, matching_skills, skill_matches
from .profile_store import InMemoryMatchStore, JsonFileMatchStore, MatchStore

__all__ = [
    "filter_by_proximity",
    "GeoResolver",
    "Geocoder",
    "distance_km",
    "kilometers_to_miles",
    "location_score",
    "KnownLocationGeocoder",
    "NominatimGeocoder",
    "get_geocoder",
    "extract_keywords",
    "keyword_overlap",
    "matching_skills",
    "skill_matches",
    "InMemoryMatchStore",
    "JsonFileMatchStore",
    "MatchStore",
]
