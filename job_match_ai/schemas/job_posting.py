"""Job posting record as supplied by the storage collaborator."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from job_match_ai.schemas.coordinates import Coordinates


class JobPosting(BaseModel):
    """Employer job posting. Read-only for the match core."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Stable job identifier")
    title: str = Field(default="", description="Job title")
    location: Optional[str] = Field(default=None, description="Free-text job location")
    coordinates: Optional[Coordinates] = Field(default=None, description="Resolved location, if known")
    requirements: List[str] = Field(default_factory=list, description="Required skills or qualifications")
    description: Optional[str] = Field(default=None, description="Free-text job description")
    employer_id: Optional[str] = Field(default=None, description="Employer identifier")
    employer_name: Optional[str] = Field(default=None, description="Employer display name")
    salary: Optional[str] = Field(default=None, description="Salary or compensation text")
    working_days: Optional[str] = Field(default=None, description="Working days, e.g. Mon-Fri")
    working_hours: Optional[str] = Field(default=None, description="Working hours text")
    benefits: List[str] = Field(default_factory=list, description="Listed benefits")
    applicants_count: Optional[int] = Field(default=None, description="Number of applicants so far")
    created_at: Optional[str] = Field(default=None, description="Creation timestamp as stored")

    @field_validator("requirements", "benefits", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v
