"""Candidate (job seeker) profile as supplied by the storage collaborator."""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from job_match_ai.schemas.coordinates import Coordinates


class CandidateProfile(BaseModel):
    """Job seeker profile. Every matching field is optional; gaps are skipped when scoring."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Stable candidate identifier")
    display_name: str = Field(default="", description="Name shown to employers")
    skills: List[str] = Field(default_factory=list, description="Self-reported skills")
    bio: Optional[str] = Field(default=None, description="Free-text bio")
    experience: Optional[str] = Field(default=None, description="Free-text work experience")
    location: Optional[str] = Field(default=None, description="Free-text home location")
    coordinates: Optional[Coordinates] = Field(default=None, description="Resolved location, if known")
    max_distance_km: Optional[float] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("max_distance_km", "maxDistanceKm", "maxDistance"),
        serialization_alias="maxDistanceKm",
        description="Maximum travel distance in km; None (or <= 0) means the configured default",
    )
    email: Optional[str] = Field(default=None, description="Contact email")
    education: Optional[str] = Field(default=None, description="Free-text education")

    @field_validator("skills", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("max_distance_km", mode="before")
    @classmethod
    def _unset_distance_to_none(cls, v):
        """0 or a negative travel distance means no preference."""
        if v is None or isinstance(v, bool):
            return v
        try:
            return None if float(v) <= 0 else v
        except (TypeError, ValueError):
            return v
