"""Match Agent: public entry point for pairwise scoring, top-K ranking and proximity search."""

from typing import Any, Iterable, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from job_match_ai.config import DEFAULT_MAX_DISTANCE_KM, DEFAULT_TOP_K
from job_match_ai.ranking.knn_ranker import KnnRanker
from job_match_ai.ranking.similarity_scorer import SimilarityScorer
from job_match_ai.schemas.candidate_profile import CandidateProfile
from job_match_ai.schemas.coordinates import Coordinates
from job_match_ai.schemas.job_posting import JobPosting
from job_match_ai.schemas.match_result import CandidateMatch, JobMatch, MatchResult, NearbyJob
from job_match_ai.schemas.scoring_config import ScoringConfig
from job_match_ai.services.filter_service import filter_by_proximity
from job_match_ai.services.geo_service import Geocoder, GeoResolver
from job_match_ai.services.geocoding_client import get_geocoder
from job_match_ai.services.profile_store import MatchStore
from job_match_ai.utils.errors import InvalidInput, RecordNotFound
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", JobPosting, CandidateProfile)


def _coerce(value: Any, model: Type[RecordT], role: str) -> RecordT:
    """Accept a model instance or a plain dict; reject missing records and blank ids."""
    if value is None:
        raise InvalidInput(f"{role} is required")
    if isinstance(value, model):
        record = value
    elif isinstance(value, dict):
        try:
            record = model.model_validate(value)
        except ValidationError as e:
            raise InvalidInput(f"Invalid {role}: {e}") from e
    else:
        raise InvalidInput(f"{role} must be a {model.__name__} or dict, got {type(value).__name__}")
    if not (record.id or "").strip():
        raise InvalidInput(f"{role} is missing its identifier")
    return record


def _coerce_pool(values: Optional[Iterable[Any]], model: Type[RecordT], role: str) -> List[RecordT]:
    return [_coerce(v, model, role) for v in (values or [])]


def _coerce_coordinates(value: Any) -> Coordinates:
    if value is None:
        raise InvalidInput("reference coordinates are required")
    if isinstance(value, Coordinates):
        return value
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump()
        if isinstance(value, (tuple, list)) and len(value) == 2:
            value = {"latitude": value[0], "longitude": value[1]}
        return Coordinates.model_validate(value)
    except ValidationError as e:
        raise InvalidInput(f"Invalid reference coordinates: {e}") from e


class MatchQueryService:
    """
    Composes the scorer, ranker and proximity filter behind four operations,
    plus id-based variants when a MatchStore is supplied.
    """

    def __init__(
        self,
        geocoder: Optional[Geocoder] = None,
        scoring_config: Optional[ScoringConfig] = None,
        store: Optional[MatchStore] = None,
    ) -> None:
        self._resolver = GeoResolver(geocoder or get_geocoder())
        self._scorer = SimilarityScorer(self._resolver, scoring_config or ScoringConfig.from_env())
        self._ranker = KnnRanker(self._scorer)
        self._store = store

    @property
    def scorer(self) -> SimilarityScorer:
        return self._scorer

    async def score_direct(
        self,
        job: Union[JobPosting, dict],
        candidate: Union[CandidateProfile, dict],
    ) -> MatchResult:
        """Score one job/candidate pair."""
        job = _coerce(job, JobPosting, "job")
        candidate = _coerce(candidate, CandidateProfile, "candidate")
        return await self._scorer.score(job, candidate)

    async def rank_candidates_for_job(
        self,
        job: Union[JobPosting, dict],
        candidates: Iterable[Union[CandidateProfile, dict]],
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> List[CandidateMatch]:
        job = _coerce(job, JobPosting, "job")
        pool = _coerce_pool(candidates, CandidateProfile, "candidate")
        return await self._ranker.rank_candidates_for_job(job, pool, k, max_distance_km)

    async def rank_jobs_for_candidate(
        self,
        candidate: Union[CandidateProfile, dict],
        jobs: Iterable[Union[JobPosting, dict]],
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> List[JobMatch]:
        candidate = _coerce(candidate, CandidateProfile, "candidate")
        pool = _coerce_pool(jobs, JobPosting, "job")
        return await self._ranker.rank_jobs_for_candidate(candidate, pool, k, max_distance_km)

    async def filter_by_proximity(
        self,
        jobs: Iterable[Union[JobPosting, dict]],
        reference_coords: Union[Coordinates, dict, tuple],
        max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
    ) -> List[NearbyJob]:
        """Jobs within max_distance_km of reference_coords; ungeocodable jobs are dropped."""
        reference = _coerce_coordinates(reference_coords)
        if max_distance_km is None or not max_distance_km > 0:
            raise InvalidInput(f"max_distance_km must be positive, got {max_distance_km!r}")
        pool = _coerce_pool(jobs, JobPosting, "job")
        return await filter_by_proximity(pool, reference, max_distance_km, self._resolver)

    # id-based operations backed by the store

    def _require_store(self) -> MatchStore:
        if self._store is None:
            raise InvalidInput("No record store configured for id-based matching")
        return self._store

    def _get_job(self, job_id: Optional[str]) -> JobPosting:
        if not (job_id or "").strip():
            raise InvalidInput("Job ID is required")
        job = self._require_store().get_job(job_id)
        if job is None:
            raise RecordNotFound(f"Job not found: {job_id}")
        return job

    def _get_candidate(self, candidate_id: Optional[str]) -> CandidateProfile:
        if not (candidate_id or "").strip():
            raise InvalidInput("Candidate ID is required")
        candidate = self._require_store().get_candidate(candidate_id)
        if candidate is None:
            raise RecordNotFound(f"Candidate not found: {candidate_id}")
        return candidate

    async def score_by_ids(self, job_id: str, candidate_id: str) -> MatchResult:
        return await self.score_direct(self._get_job(job_id), self._get_candidate(candidate_id))

    async def match_candidates_for_job_id(
        self,
        job_id: str,
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> List[CandidateMatch]:
        job = self._get_job(job_id)
        candidates = self._require_store().list_candidates()
        return await self._ranker.rank_candidates_for_job(job, candidates, k, max_distance_km)

    async def match_jobs_for_candidate_id(
        self,
        candidate_id: str,
        k: int = DEFAULT_TOP_K,
        max_distance_km: Optional[float] = None,
    ) -> List[JobMatch]:
        """Without an explicit cutoff, the candidate's own travel preference is applied."""
        candidate = self._get_candidate(candidate_id)
        cutoff = max_distance_km if max_distance_km is not None else candidate.max_distance_km
        logger.debug("Matching jobs for candidate=%s cutoff_km=%s", candidate_id, cutoff)
        jobs = self._require_store().list_jobs()
        return await self._ranker.rank_jobs_for_candidate(candidate, jobs, k, cutoff)

    async def jobs_near(
        self,
        latitude: float,
        longitude: float,
        max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
    ) -> List[NearbyJob]:
        jobs = self._require_store().list_jobs()
        return await self.filter_by_proximity(jobs, (latitude, longitude), max_distance_km)
