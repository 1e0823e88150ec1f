"""
Resume Review API endpoints

Handles:
- Job-title recommendations for resume text
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from careerprep.api.dependencies import get_resume_reviewer
from careerprep.models.resume import ResumeAnalysis

router = APIRouter()


class AnalyzeRequest(BaseModel):
    """Request model for resume analysis."""
    resume_text: str = ""


@router.post("/analyze", response_model=ResumeAnalysis)
async def analyze_resume(request: AnalyzeRequest) -> ResumeAnalysis:
    """
    Recommend job titles for a resume.

    Text must already be extracted from the uploaded document.
    """
    if not request.resume_text.strip():
        raise HTTPException(status_code=400, detail="Resume text is required")

    return get_resume_reviewer().analyze(request.resume_text)
