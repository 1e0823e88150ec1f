"""
Core business logic modules for CareerPrep

Contains:
- Adaptive Sequencer: Staircase difficulty control for MCQ tests
- Keyword Scorer: TF-IDF inspired job-title matching
- MCQ Orchestrator: State machine for test sessions
- Question Pool Supplier: AI gateway client for question pools
- Resume Reviewer: Job recommendations for resumes
"""

from careerprep.core.mcq_orchestrator import MCQTestOrchestrator
from careerprep.core.question_pool import QuestionPoolSupplier
from careerprep.core.resume_reviewer import ResumeReviewer

__all__ = [
    "MCQTestOrchestrator",
    "QuestionPoolSupplier",
    "ResumeReviewer",
]
