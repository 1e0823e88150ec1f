"""
MCQ Test API endpoints

Handles adaptive test session lifecycle:
- Requesting question pools
- Creating sessions
- Starting tests
- Submitting answers
- Ending tests and viewing results
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from careerprep.api.dependencies import get_orchestrator, get_question_supplier
from careerprep.config.settings import get_settings
from careerprep.core.mcq_orchestrator import SessionNotFoundError, StateTransitionError
from careerprep.core.question_pool import (
    GatewayCreditsError,
    GatewayRateLimitError,
    QuestionPoolError,
)
from careerprep.models.mcq import MCQTestSetup, MCQTestState
from careerprep.models.question import Question

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class GenerateRequest(BaseModel):
    """Request model for generating a question pool."""
    topic: str = Field(..., min_length=1)
    number_of_questions: int = Field(default=10, ge=1)


class GenerateResponse(BaseModel):
    """Generated question pool."""
    topic: str
    questions: list[Question]


class SetupRequest(BaseModel):
    """Request model for test setup."""
    topic: str = "MCQ Test"
    total_questions: int | None = Field(default=None, ge=1)
    random_seed: int | None = None
    questions: list[Question] = Field(..., min_length=1)


class SetupResponse(BaseModel):
    """Response model for test setup."""
    session_id: str
    status: str
    total_questions: int
    time_limit_seconds: int
    message: str


class StartResponse(BaseModel):
    """Response after starting a test."""
    session_id: str
    state: str
    first_question: dict[str, Any]


class AnswerRequest(BaseModel):
    """Request model for submitting an answer. None skips the question."""
    chosen_option_index: int | None = Field(default=None, ge=0, le=3)


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("/generate", response_model=GenerateResponse)
async def generate_questions(request: GenerateRequest) -> GenerateResponse:
    """
    Request a difficulty-tagged question pool from the AI gateway.
    """
    settings = get_settings()
    if request.number_of_questions > settings.max_total_questions:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_total_questions} questions can be generated"
        )

    supplier = get_question_supplier()
    if supplier is None:
        raise HTTPException(status_code=503, detail="Question generation is not configured")

    try:
        questions = await supplier.generate_pool(request.topic, request.number_of_questions)
    except GatewayRateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except GatewayCreditsError as e:
        raise HTTPException(status_code=402, detail=str(e))
    except QuestionPoolError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return GenerateResponse(topic=request.topic, questions=questions)


@router.post("/setup", response_model=SetupResponse)
async def setup_test(request: SetupRequest) -> SetupResponse:
    """
    Create a new test session from a question pool.

    This stores the pool but does not start the timer yet.
    """
    settings = get_settings()
    total = request.total_questions or settings.default_total_questions
    total = min(total, settings.max_total_questions)

    setup = MCQTestSetup(
        topic=request.topic,
        total_questions=total,
        seconds_per_question=settings.seconds_per_question,
        random_seed=request.random_seed,
    )

    orchestrator = get_orchestrator()
    try:
        session = await orchestrator.create_session(setup, request.questions)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SetupResponse(
        session_id=session.session_id,
        status="created",
        total_questions=session.setup.total_questions,
        time_limit_seconds=session.time_limit_seconds,
        message="Test session created. Call /start to begin.",
    )


@router.post("/{session_id}/start", response_model=StartResponse)
async def start_test(session_id: str) -> StartResponse:
    """
    Start the test.

    Starts the timer and delivers the first question at easy difficulty.
    """
    orchestrator = get_orchestrator()

    try:
        first_question = await orchestrator.start_test(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except StateTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StartResponse(
        session_id=session_id,
        state=MCQTestState.IN_PROGRESS.value,
        first_question=first_question,
    )


@router.post("/{session_id}/answer")
async def submit_answer(session_id: str, request: AnswerRequest) -> dict[str, Any]:
    """
    Submit an answer to the current question.

    The answer is graded, difficulty is adjusted and the next question
    (or a completion notice) is returned.
    """
    orchestrator = get_orchestrator()

    try:
        return await orchestrator.submit_answer(session_id, request.chosen_option_index)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except StateTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{session_id}/end")
async def end_test(session_id: str) -> dict[str, Any]:
    """End the test early."""
    orchestrator = get_orchestrator()
    session = orchestrator.get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if session.state in [MCQTestState.COMPLETE, MCQTestState.CANCELLED]:
        return {"status": "already_ended", "session_id": session_id}

    return await orchestrator.end_test(session_id)


@router.get("/{session_id}/status")
async def get_session_status(session_id: str) -> dict[str, Any]:
    """Get the current status of a test session."""
    orchestrator = get_orchestrator()

    try:
        return orchestrator.get_status(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.get("/{session_id}/results")
async def get_results(session_id: str) -> dict[str, Any]:
    """
    Get the results of a completed test.

    Includes score, per-tier tallies, the difficulty trace and a
    per-question review with explanations.
    """
    orchestrator = get_orchestrator()

    try:
        return orchestrator.get_results(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except StateTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
