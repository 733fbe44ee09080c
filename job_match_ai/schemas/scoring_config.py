"""Tunable scoring weights and thresholds passed into the similarity scorer."""

from pydantic import BaseModel, ConfigDict, Field

from job_match_ai import config


class ScoringConfig(BaseModel):
    """
    Criterion weights plus location scoring knobs.
    Weights need not sum to 1: the score is normalized over the active criteria.
    Unset fields take the values loaded in config.py (.env / process env).
    """

    model_config = ConfigDict(frozen=True)

    skills_weight: float = Field(default_factory=lambda: config.WEIGHT_SKILLS, ge=0.0)
    location_weight: float = Field(default_factory=lambda: config.WEIGHT_LOCATION, ge=0.0)
    description_weight: float = Field(default_factory=lambda: config.WEIGHT_DESCRIPTION, ge=0.0)
    experience_weight: float = Field(default_factory=lambda: config.WEIGHT_EXPERIENCE, ge=0.0)
    text_fallback_location_score: float = Field(
        default_factory=lambda: config.TEXT_FALLBACK_LOCATION_SCORE, ge=0.0, le=1.0
    )
    default_max_distance_km: float = Field(
        default_factory=lambda: config.DEFAULT_MAX_DISTANCE_KM, gt=0.0
    )

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        """Build entirely from config.py."""
        return cls()
