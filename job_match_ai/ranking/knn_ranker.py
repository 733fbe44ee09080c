"""K-NN style ranking: score a pool against one reference record and keep the top K."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence, Union

from job_match_ai.config import DEFAULT_TOP_K, SCORING_CONCURRENCY
from job_match_ai.ranking.similarity_scorer import SimilarityScorer
from job_match_ai.schemas.candidate_profile import CandidateProfile
from job_match_ai.schemas.job_posting import JobPosting
from job_match_ai.schemas.match_result import CandidateMatch, JobMatch, MatchResult
from job_match_ai.utils.errors import InvalidInput
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _validate_limits(k: int, max_distance_km: Optional[float]) -> None:
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise InvalidInput(f"k must be a positive integer, got {k!r}")
    if max_distance_km is not None and not max_distance_km > 0:
        raise InvalidInput(f"max_distance_km must be positive, got {max_distance_km!r}")


def _check_pool(pool: Sequence, model: type) -> None:
    for member in pool:
        if not isinstance(member, model):
            raise InvalidInput(f"pool members must be {model.__name__}, got {type(member).__name__}")


def _within_distance(result: MatchResult, max_distance_km: Optional[float]) -> bool:
    """Unknown distance is never treated as too far."""
    if max_distance_km is None or result.distance_km is None:
        return True
    return result.distance_km <= max_distance_km


def _top_k(results: list, k: int, max_distance_km: Optional[float]) -> list:
    kept = [r for r in results if _within_distance(r, max_distance_km)]
    # Stable sort: equal scores keep pool order
    kept.sort(key=lambda r: -r.score)
    return kept[:k]


class KnnRanker:
    """Ranks candidates for a job or jobs for a candidate with the same scorer (reciprocal matching)."""

    def __init__(self, scorer: SimilarityScorer, concurrency: int = SCORING_CONCURRENCY) -> None:
        self._scorer = scorer
        self._concurrency = max(1, concurrency)

    @property
    def scorer(self) -> SimilarityScorer:
        return self._scorer

    async def rank_candidates_for_job(
        self,
        job: JobPosting,
        candidates: Sequence[CandidateProfile],
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> List[CandidateMatch]:
        """
        Score every candidate against the job concurrently, drop those known to be
        farther than max_distance_km, and return the k best by score.
        """
        _validate_limits(k, max_distance_km)
        _check_pool(candidates, CandidateProfile)
        if not candidates:
            return []
        resolver = self._scorer.resolver
        job_coords = await resolver.coordinates_for(job)
        sem = asyncio.Semaphore(self._concurrency)

        async def task(candidate: CandidateProfile) -> CandidateMatch:
            async with sem:
                candidate_coords = await resolver.coordinates_for(candidate)
            result = self._scorer.score_resolved(job, candidate, job_coords, candidate_coords)
            return CandidateMatch(**dict(result), candidate=candidate)

        results = await asyncio.gather(*[task(c) for c in candidates])
        ranked = _top_k(list(results), k, max_distance_km)
        logger.info(
            "Ranked candidates for job=%s: pool=%s returned=%s", job.id, len(candidates), len(ranked)
        )
        return ranked

    async def rank_jobs_for_candidate(
        self,
        candidate: CandidateProfile,
        jobs: Sequence[JobPosting],
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> List[JobMatch]:
        """Mirror of rank_candidates_for_job with the candidate as reference."""
        _validate_limits(k, max_distance_km)
        _check_pool(jobs, JobPosting)
        if not jobs:
            return []
        resolver = self._scorer.resolver
        candidate_coords = await resolver.coordinates_for(candidate)
        sem = asyncio.Semaphore(self._concurrency)

        async def task(job: JobPosting) -> JobMatch:
            async with sem:
                job_coords = await resolver.coordinates_for(job)
            result = self._scorer.score_resolved(job, candidate, job_coords, candidate_coords)
            return JobMatch(**dict(result), job=job)

        results = await asyncio.gather(*[task(j) for j in jobs])
        ranked = _top_k(list(results), k, max_distance_km)
        logger.info(
            "Ranked jobs for candidate=%s: pool=%s returned=%s", candidate.id, len(jobs), len(ranked)
        )
        return ranked

    async def rank(
        self,
        reference: Union[JobPosting, CandidateProfile],
        pool: Sequence[Union[JobPosting, CandidateProfile]],
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> Union[List[CandidateMatch], List[JobMatch]]:
        """Dispatch on the reference type: a job ranks candidates, a candidate ranks jobs."""
        if isinstance(reference, JobPosting):
            return await self.rank_candidates_for_job(reference, pool, k, max_distance_km)
        if isinstance(reference, CandidateProfile):
            return await self.rank_jobs_for_candidate(reference, pool, k, max_distance_km)
        raise InvalidInput(f"Unsupported reference record: {type(reference).__name__}")
