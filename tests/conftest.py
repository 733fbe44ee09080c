"""
Pytest configuration and shared fixtures.
"""

import asyncio
import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from job_match_ai.schemas import CandidateProfile, Coordinates, JobPosting
from job_match_ai.services.geo_service import GeoResolver, Geocoder
from job_match_ai.services.geocoding_client import KnownLocationGeocoder
from job_match_ai.utils.errors import GeocodingUnavailable

LONDON = Coordinates(latitude=51.5074, longitude=-0.1278)
MANCHESTER = Coordinates(latitude=53.4808, longitude=-2.2426)


class RecordingGeocoder(Geocoder):
    """Async geocoder over the known-location table that records every lookup."""

    def __init__(self, delay: float = 0.0) -> None:
        self._inner = KnownLocationGeocoder()
        self._delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def geocode(self, address: str) -> Optional[Coordinates]:
        self.calls.append(address)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delay)
            return self._inner.geocode(address)
        finally:
            self.in_flight -= 1


class UnavailableGeocoder(Geocoder):
    """Geocoder whose backend is always down."""

    def geocode(self, address: str) -> Optional[Coordinates]:
        raise GeocodingUnavailable("backend down")


@pytest.fixture
def known_geocoder() -> KnownLocationGeocoder:
    return KnownLocationGeocoder()


@pytest.fixture
def resolver(known_geocoder) -> GeoResolver:
    return GeoResolver(known_geocoder)


@pytest.fixture
def london_job() -> JobPosting:
    """Backend role in London with four requirements."""
    return JobPosting(
        id="job-1",
        title="Backend Engineer",
        location="London",
        requirements=["Python", "Django", "AWS", "Docker"],
        description="Python developer building scalable APIs",
        employer_id="emp-1",
        employer_name="Acme Ltd",
    )


@pytest.fixture
def candidate_pool() -> List[CandidateProfile]:
    """Candidates with distinct, hand-computable scores against london_job (no text fields)."""
    return [
        # skills 1.0, Manchester is ~262 km away -> location 0.0 -> 0.5 / 0.7
        CandidateProfile(id="c-full", skills=["python", "django", "aws", "docker"], location="Manchester"),
        # skills 0.25, same city -> location 1.0 -> 0.325 / 0.7
        CandidateProfile(id="c-local", skills=["python"], location="London"),
        # skills 0.5, no location -> 0.5
        CandidateProfile(id="c-nolocation", skills=["python", "django"]),
        # nothing comparable -> 0.0
        CandidateProfile(id="c-empty"),
    ]


@pytest.fixture
def job_pool() -> List[JobPosting]:
    return [
        JobPosting(id="j-manchester", title="Data Engineer", location="Manchester", requirements=["Python", "Spark"]),
        JobPosting(id="j-london", title="Web Developer", location="London", requirements=["React", "Node.js"]),
        JobPosting(id="j-remote", title="Python Developer", requirements=["Python"]),
    ]


@pytest.fixture
def store_file(tmp_path, london_job, candidate_pool, job_pool) -> Path:
    """JSON store in the camelCase shape the document database uses."""
    data: Dict[str, list] = {
        "jobs": [j.model_dump(by_alias=True, exclude_none=True) for j in [london_job, *job_pool]],
        "candidates": [c.model_dump(by_alias=True, exclude_none=True) for c in candidate_pool],
    }
    data["candidates"].append({
        "id": "c-commuter",
        "displayName": "Sam",
        "skills": ["Python", "Spark"],
        "location": "Manchester",
        "maxDistance": 100,
    })
    path = tmp_path / "store.json"
    path.write_text(json.dumps(data, indent=2))
    return path
