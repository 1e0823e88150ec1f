"""
Resume review models for CareerPrep
"""

from pydantic import BaseModel, Field


class JobRecommendation(BaseModel):
    """A recommended job title as shown to the candidate."""

    title: str
    match_score: int = Field(..., ge=0, le=100, description="Display score (0-100)")
    matched_keywords: list[str] = Field(
        default_factory=list,
        description="Up to five keywords that produced the match"
    )


class AlgorithmInfo(BaseModel):
    """Description of an algorithm that contributed to the analysis."""

    name: str
    description: str


class ResumeAnalysis(BaseModel):
    """Result of reviewing one resume."""

    recommended_job_titles: list[JobRecommendation] = Field(default_factory=list)
    catalog_version: str
    algorithms_used: dict[str, AlgorithmInfo] = Field(default_factory=dict)
    word_count: int = 0
