"""Read-only storage collaborator: job postings and candidate profiles by id or in bulk."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

from job_match_ai.schemas.candidate_profile import CandidateProfile
from job_match_ai.schemas.job_posting import JobPosting
from job_match_ai.utils.errors import InvalidInput
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


class MatchStore(ABC):
    """Abstract record source. The match core never writes through it."""

    @abstractmethod
    def get_job(self, job_id: str) -> Optional[JobPosting]:
        ...

    @abstractmethod
    def get_candidate(self, candidate_id: str) -> Optional[CandidateProfile]:
        ...

    @abstractmethod
    def list_jobs(self) -> List[JobPosting]:
        ...

    @abstractmethod
    def list_candidates(self) -> List[CandidateProfile]:
        ...


class InMemoryMatchStore(MatchStore):
    """Dict-backed store; later records with a duplicate id replace earlier ones."""

    def __init__(
        self,
        jobs: Iterable[JobPosting] = (),
        candidates: Iterable[CandidateProfile] = (),
    ) -> None:
        self._jobs = {j.id: j for j in jobs}
        self._candidates = {c.id: c for c in candidates}

    def get_job(self, job_id: str) -> Optional[JobPosting]:
        return self._jobs.get(job_id)

    def get_candidate(self, candidate_id: str) -> Optional[CandidateProfile]:
        return self._candidates.get(candidate_id)

    def list_jobs(self) -> List[JobPosting]:
        return list(self._jobs.values())

    def list_candidates(self) -> List[CandidateProfile]:
        return list(self._candidates.values())


class JsonFileMatchStore(InMemoryMatchStore):
    """
    Loads {"jobs": [...], "candidates": [...]} from a JSON file once.
    A missing or empty file gives an empty store.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        data = self._load(self.path)
        super().__init__(
            jobs=[JobPosting.model_validate(j) for j in data.get("jobs", [])],
            candidates=[CandidateProfile.model_validate(c) for c in data.get("candidates", [])],
        )
        logger.info(
            "Loaded store %s: jobs=%s candidates=%s",
            self.path, len(self._jobs), len(self._candidates),
        )

    @staticmethod
    def _load(path: Path) -> dict:
        if not path.exists():
            logger.warning("Store file not found: %s", path)
            return {}
        try:
            with path.open("r", encoding="utf-8") as f:
                content = f.read().strip()
            if not content:
                return {}
            data = json.loads(content)
        except (OSError, ValueError) as e:
            raise InvalidInput(f"Could not read store file {path}: {e}") from e
        if not isinstance(data, dict):
            raise InvalidInput(f"Store file {path} must hold a JSON object, got {type(data).__name__}")
        return data
