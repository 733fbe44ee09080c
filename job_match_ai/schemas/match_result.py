"""Match result schemas returned by scoring, ranking and proximity filtering."""

import math
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from job_match_ai.schemas.candidate_profile import CandidateProfile
from job_match_ai.schemas.job_posting import JobPosting


class MatchDetails(BaseModel):
    """Per-criterion scores, each in [0, 1]. Skipped criteria stay at 0."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    skills_match: float = Field(default=0.0, ge=0.0, le=1.0)
    location_match: float = Field(default=0.0, ge=0.0, le=1.0)
    experience_match: float = Field(default=0.0, ge=0.0, le=1.0)
    description_match: float = Field(default=0.0, ge=0.0, le=1.0)


class MatchResult(BaseModel):
    """Combined score for one job/candidate pair."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    score: float = Field(..., ge=0.0, le=1.0, description="Weighted average over active criteria")
    match_percentage: int = Field(..., ge=0, le=100, description="score * 100 rounded half up")
    match_details: MatchDetails = Field(default_factory=MatchDetails)
    distance_km: Optional[float] = Field(
        default=None, description="Haversine distance; only set when both sides were geocoded"
    )

    @classmethod
    def from_score(
        cls,
        score: float,
        match_details: MatchDetails,
        distance_km: Optional[float] = None,
    ) -> "MatchResult":
        score = max(0.0, min(1.0, score))
        return cls(
            score=score,
            match_percentage=int(math.floor(score * 100 + 0.5)),  # half up
            match_details=match_details,
            distance_km=distance_km,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Boundary representation: camelCase keys, distanceKm omitted when unknown."""
        return self.model_dump(by_alias=True, exclude_none=True)


class JobMatch(MatchResult):
    """A job ranked for a candidate."""

    job: JobPosting


class CandidateMatch(MatchResult):
    """A candidate ranked for a job."""

    candidate: CandidateProfile


class NearbyJob(JobPosting):
    """Job posting annotated with its distance from a reference point."""

    distance_km: float = Field(..., ge=0.0)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
