"""Schema exports."""

from .candidate_profile import CandidateProfile
from .coordinates import Coordinates
from .job_posting import JobPosting
from .match_result import CandidateMatch, JobMatch, MatchDetails, MatchResult, NearbyJob
from .scoring_config import ScoringConfig

__all__ = [
    "CandidateMatch",
    "CandidateProfile",
    "Coordinates",
    "JobMatch",
    "JobPosting",
    "MatchDetails",
    "MatchResult",
    "NearbyJob",
    "ScoringConfig",
]
