"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Ranking defaults
DEFAULT_TOP_K: int = 5
DEFAULT_MAX_DISTANCE_KM: float = _env_float("DEFAULT_MAX_DISTANCE_KM", 50.0)

# Haversine earth radius; fixtures depend on this exact value
EARTH_RADIUS_KM: float = 6371.0
KM_TO_MILES: float = 0.621371

# Criterion weights (normalized over the criteria that have data)
WEIGHT_SKILLS: float = _env_float("MATCH_WEIGHT_SKILLS", 0.5)
WEIGHT_LOCATION: float = _env_float("MATCH_WEIGHT_LOCATION", 0.2)
WEIGHT_DESCRIPTION: float = _env_float("MATCH_WEIGHT_DESCRIPTION", 0.2)
WEIGHT_EXPERIENCE: float = _env_float("MATCH_WEIGHT_EXPERIENCE", 0.1)

# Score used when geocoding fails but one location string contains the other
TEXT_FALLBACK_LOCATION_SCORE: float = _env_float("TEXT_FALLBACK_LOCATION_SCORE", 0.7)

# Concurrency
SCORING_CONCURRENCY: int = _env_int("SCORING_CONCURRENCY", 20)  # Max pool members scored at once

# Geocoding collaborator
GEOCODER_PROVIDER: str = os.getenv("GEOCODER_PROVIDER", "known_locations")
NOMINATIM_URL: str = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
GEOCODER_USER_AGENT: str = os.getenv("GEOCODER_USER_AGENT", "JobMatchAI/1.0")
GEOCODER_TIMEOUT_SECONDS: float = _env_float("GEOCODER_TIMEOUT_SECONDS", 10.0)
GEOCODER_MAX_RETRIES: int = _env_int("GEOCODER_MAX_RETRIES", 3)

# Offline lookup table for the default geocoder (extensible: add new entry per city)
KNOWN_LOCATIONS: dict = {
    "london": (51.5074, -0.1278),
    "manchester": (53.4808, -2.2426),
    "birmingham": (52.4862, -1.8904),
    "leeds": (53.8008, -1.5491),
    "liverpool": (53.4084, -2.9916),
    "newcastle": (54.9783, -1.6178),
    "sheffield": (53.3811, -1.4701),
    "bristol": (51.4545, -2.5879),
    "cardiff": (51.4816, -3.1791),
    "edinburgh": (55.9533, -3.1883),
    "glasgow": (55.8642, -4.2518),
    "belfast": (54.5973, -5.9301),
    "dublin": (53.3498, -6.2603),
}
