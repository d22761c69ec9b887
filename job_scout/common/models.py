"""
Data models for Job Match Scout.

Records parsed from model output accept the camelCase keys the prompts ask
for (``websiteUrl``, ``matchScore``, ...) as aliases of the snake_case
fields, and coerce the loosely typed values models tend to return.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_MATCH_SCORE = 0
MAX_MATCH_SCORE = 100


def _optional_text(value: Any) -> Optional[str]:
    """Normalize blank strings to None and stringify other scalars."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SearchCriteria(BaseModel):
    """Free-text criteria submitted once per search cycle."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    industry_text: str = Field(..., alias="industryText", description="Target industry / company criteria")
    job_text: str = Field(..., alias="jobText", description="Job screening criteria")

    @field_validator("industry_text", "job_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("criteria text must not be blank")
        return value


class Company(BaseModel):
    """Candidate company returned by the company search."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = Field(..., min_length=1)
    description: str = ""
    relevance_reason: str = Field(default="", alias="relevance")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    selected: bool = True

    @field_validator("description", "relevance_reason", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("website_url", mode="before")
    @classmethod
    def _url(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class JobPosting(BaseModel):
    """A job posting screened against the user's criteria."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: str = ""
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    education_level: str = Field(default="", alias="educationLevel")
    employment_type: str = Field(default="", alias="employmentType")
    salary: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    match_score: int = Field(default=0, alias="matchScore", ge=MIN_MATCH_SCORE, le=MAX_MATCH_SCORE)
    match_reason: str = Field(default="", alias="matchReason")

    @field_validator("role", "description", "education_level", "employment_type", "match_reason", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("salary", "location", "url", mode="before")
    @classmethod
    def _optional(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("requirements", mode="before")
    @classmethod
    def _requirements_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None and str(item).strip()]
        return [str(value)]

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> int:
        """Coerce "85", 85.4 or "85%" into an int clamped to 0..100."""
        if isinstance(value, bool) or value is None:
            return MIN_MATCH_SCORE
        if isinstance(value, str):
            value = value.strip().rstrip("%").strip()
        try:
            score = int(round(float(value)))
        except (TypeError, ValueError, OverflowError):
            return MIN_MATCH_SCORE
        return max(MIN_MATCH_SCORE, min(MAX_MATCH_SCORE, score))


class JobAnalysis(BaseModel):
    """Result of analyzing one company's job postings."""

    model_config = ConfigDict(frozen=True)

    jobs: List[JobPosting] = Field(default_factory=list)
    summary: str = ""


class CompanyAnalysis(BaseModel):
    """
    Per-company analysis state during a batch.

    Created pending (``is_loading=True``) and finished exactly once via
    ``complete``; every transition returns a new instance.
    """

    model_config = ConfigDict(frozen=True)

    company_id: str
    company_name: str
    jobs: List[JobPosting] = Field(default_factory=list)
    summary: str = ""
    is_analyzed: bool = False
    is_loading: bool = True

    @classmethod
    def pending(cls, company: Company) -> "CompanyAnalysis":
        return cls(company_id=company.id, company_name=company.name)

    def complete(self, jobs: List[JobPosting], summary: str) -> "CompanyAnalysis":
        """Leave the loading state; a finished analysis cannot be completed again."""
        if not self.is_loading:
            raise ValueError(f"Analysis for {self.company_name!r} already finished")
        return self.model_copy(
            update={
                "jobs": list(jobs),
                "summary": summary,
                "is_analyzed": True,
                "is_loading": False,
            }
        )
