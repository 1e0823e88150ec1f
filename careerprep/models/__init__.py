"""
Data models and schemas for CareerPrep

Contains Pydantic models for:
- MCQ questions and answers
- Adaptive sequencer and test session state
- Job profiles and matches
- Resume analysis results
"""

from careerprep.models.question import AnswerRecord, Difficulty, DIFFICULTY_ORDER, Question
from careerprep.models.mcq import (
    CompletionReason,
    MCQTestSession,
    MCQTestSetup,
    MCQTestState,
    SequencerState,
    TierTally,
)
from careerprep.models.jobs import (
    JOB_CATALOG_VERSION,
    JOB_PROFILE_CATALOG,
    JobMatch,
    JobProfile,
    KeywordGroup,
)
from careerprep.models.resume import AlgorithmInfo, JobRecommendation, ResumeAnalysis

__all__ = [
    # Question
    "AnswerRecord",
    "Difficulty",
    "DIFFICULTY_ORDER",
    "Question",
    # MCQ
    "CompletionReason",
    "MCQTestSession",
    "MCQTestSetup",
    "MCQTestState",
    "SequencerState",
    "TierTally",
    # Jobs
    "JOB_CATALOG_VERSION",
    "JOB_PROFILE_CATALOG",
    "JobMatch",
    "JobProfile",
    "KeywordGroup",
    # Resume
    "AlgorithmInfo",
    "JobRecommendation",
    "ResumeAnalysis",
]
