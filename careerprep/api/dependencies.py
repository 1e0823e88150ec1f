"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

from careerprep.config.settings import get_settings
from careerprep.core.mcq_orchestrator import MCQTestOrchestrator
from careerprep.core.question_pool import QuestionPoolSupplier
from careerprep.core.resume_reviewer import ResumeReviewer


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_orchestrator: MCQTestOrchestrator | None = None
_question_supplier: QuestionPoolSupplier | None = None
_resume_reviewer: ResumeReviewer | None = None


def get_orchestrator() -> MCQTestOrchestrator:
    """Get the MCQ test orchestrator singleton."""
    global _orchestrator

    if _orchestrator is None:
        _orchestrator = MCQTestOrchestrator()

    return _orchestrator


def get_question_supplier() -> QuestionPoolSupplier | None:
    """
    Get the question pool supplier singleton.

    Returns None when no AI gateway key is configured.
    """
    global _question_supplier

    if _question_supplier is None:
        settings = get_settings()
        if not settings.ai_gateway_configured:
            return None
        _question_supplier = QuestionPoolSupplier(settings)

    return _question_supplier


def get_resume_reviewer() -> ResumeReviewer:
    """Get the resume reviewer singleton."""
    global _resume_reviewer

    if _resume_reviewer is None:
        _resume_reviewer = ResumeReviewer()

    return _resume_reviewer


async def cleanup():
    """Cleanup resources on shutdown."""
    global _orchestrator, _question_supplier, _resume_reviewer

    if _question_supplier:
        await _question_supplier.close()
        _question_supplier = None

    _orchestrator = None
    _resume_reviewer = None
