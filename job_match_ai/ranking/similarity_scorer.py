"""Pairwise job/candidate scoring: skills, location, description and experience overlap."""

from __future__ import annotations

import asyncio
from typing import Optional, Tuple

from job_match_ai.schemas.candidate_profile import CandidateProfile
from job_match_ai.schemas.coordinates import Coordinates
from job_match_ai.schemas.job_posting import JobPosting
from job_match_ai.schemas.match_result import MatchDetails, MatchResult
from job_match_ai.schemas.scoring_config import ScoringConfig
from job_match_ai.services.geo_service import GeoResolver, distance_km, location_score
from job_match_ai.services.keyword_extractor import keyword_overlap, matching_skills, normalize_skills
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _has_text(value: Optional[str]) -> bool:
    return bool((value or "").strip())


def _skills_score(job: JobPosting, candidate: CandidateProfile) -> Optional[float]:
    """Matched candidate skills over requirement count; None if either list is empty."""
    requirements = normalize_skills(job.requirements)
    skills = normalize_skills(candidate.skills)
    if not requirements or not skills:
        return None
    matched = matching_skills(skills, requirements)
    return min(1.0, len(matched) / max(len(requirements), 1))


def _text_location_score(job: JobPosting, candidate: CandidateProfile, fallback: float) -> float:
    """Coarse check used when geocoding fails: one location string contains the other."""
    job_loc = (job.location or "").strip().lower()
    cand_loc = (candidate.location or "").strip().lower()
    if job_loc and cand_loc and (cand_loc in job_loc or job_loc in cand_loc):
        return fallback
    return 0.0


class SimilarityScorer:
    """
    Combines per-criterion scores with the weights in ScoringConfig.
    A criterion counts toward the denominator only when both records carry its data.
    """

    def __init__(self, resolver: GeoResolver, scoring_config: Optional[ScoringConfig] = None) -> None:
        self._resolver = resolver
        self._config = scoring_config or ScoringConfig()

    @property
    def resolver(self) -> GeoResolver:
        return self._resolver

    @property
    def scoring_config(self) -> ScoringConfig:
        return self._config

    async def score(self, job: JobPosting, candidate: CandidateProfile) -> MatchResult:
        """Resolve both locations (concurrently) and score the pair."""
        job_coords, candidate_coords = await self.resolve_pair(job, candidate)
        return self.score_resolved(job, candidate, job_coords, candidate_coords)

    async def resolve_pair(
        self, job: JobPosting, candidate: CandidateProfile
    ) -> Tuple[Optional[Coordinates], Optional[Coordinates]]:
        job_coords, candidate_coords = await asyncio.gather(
            self._resolver.coordinates_for(job),
            self._resolver.coordinates_for(candidate),
        )
        return job_coords, candidate_coords

    def score_resolved(
        self,
        job: JobPosting,
        candidate: CandidateProfile,
        job_coords: Optional[Coordinates],
        candidate_coords: Optional[Coordinates],
    ) -> MatchResult:
        """Score a pair whose coordinates are already resolved (None = unresolved)."""
        cfg = self._config
        details = MatchDetails()
        total = 0.0
        max_possible = 0.0
        distance: Optional[float] = None

        skills = _skills_score(job, candidate)
        if skills is not None:
            details.skills_match = skills
            total += skills * cfg.skills_weight
            max_possible += cfg.skills_weight
        else:
            logger.debug("Skipping skills for job=%s candidate=%s: no data", job.id, candidate.id)

        job_has_location = _has_text(job.location) or job.coordinates is not None
        cand_has_location = _has_text(candidate.location) or candidate.coordinates is not None
        if job_has_location and cand_has_location:
            if job_coords is not None and candidate_coords is not None:
                distance = distance_km(job_coords, candidate_coords)
                max_km = candidate.max_distance_km or cfg.default_max_distance_km
                details.location_match = location_score(distance, max_km)
            else:
                details.location_match = _text_location_score(
                    job, candidate, cfg.text_fallback_location_score
                )
            total += details.location_match * cfg.location_weight
            max_possible += cfg.location_weight

        if _has_text(job.description) and _has_text(candidate.bio):
            details.description_match = keyword_overlap(job.description, candidate.bio)
            total += details.description_match * cfg.description_weight
            max_possible += cfg.description_weight

        if _has_text(job.description) and _has_text(candidate.experience):
            details.experience_match = keyword_overlap(job.description, candidate.experience)
            total += details.experience_match * cfg.experience_weight
            max_possible += cfg.experience_weight

        score = total / max_possible if max_possible > 0 else 0.0
        return MatchResult.from_score(score, details, distance_km=distance)
