"""
Metadata API endpoints

Provides reference data for:
- Job profiles and their keyword groups
- Difficulty tiers
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from careerprep.config.settings import get_settings
from careerprep.core.adaptive_sequencer import FALLBACK_ORDER
from careerprep.models.jobs import JOB_CATALOG_VERSION, JOB_PROFILE_CATALOG, get_job_profile
from careerprep.models.question import DIFFICULTY_ORDER

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class KeywordGroupInfo(BaseModel):
    """A weighted keyword group."""
    keywords: list[str]
    weight: float


class JobProfileInfo(BaseModel):
    """Information about a job profile."""
    job_title: str
    keyword_groups: list[KeywordGroupInfo]


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/job-profiles")
async def get_job_profiles() -> dict[str, Any]:
    """Get the job profile catalog used for resume review."""
    return {
        "version": JOB_CATALOG_VERSION,
        "profiles": [
            JobProfileInfo(
                job_title=profile.job_title,
                keyword_groups=[
                    KeywordGroupInfo(keywords=list(group.keywords), weight=group.weight)
                    for group in profile.keyword_groups
                ],
            )
            for profile in JOB_PROFILE_CATALOG.values()
        ],
    }


@router.get("/job-profiles/{job_title:path}")
async def get_job_profile_details(job_title: str) -> JobProfileInfo:
    """Get a single job profile by title."""
    profile = get_job_profile(job_title)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Unknown job title: {job_title}")

    return JobProfileInfo(
        job_title=profile.job_title,
        keyword_groups=[
            KeywordGroupInfo(keywords=list(group.keywords), weight=group.weight)
            for group in profile.keyword_groups
        ],
    )


@router.get("/difficulties")
async def get_difficulties() -> list[dict[str, Any]]:
    """Get difficulty tiers in ascending order, with their fallback tiers."""
    return [
        {
            "id": tier.value,
            "name": tier.display_name,
            "rank": tier.rank,
            "fallback": [t.value for t in FALLBACK_ORDER[tier]],
        }
        for tier in DIFFICULTY_ORDER
    ]


@router.get("/test-options")
async def get_test_options() -> dict[str, int]:
    """Get MCQ test limits."""
    settings = get_settings()
    return {
        "default_total_questions": settings.default_total_questions,
        "max_total_questions": settings.max_total_questions,
        "seconds_per_question": settings.seconds_per_question,
    }
