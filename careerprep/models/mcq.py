"""
MCQ test session and sequencer state models for CareerPrep
"""

from datetime import datetime, timedelta
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from careerprep.models.question import AnswerRecord, Difficulty, Question


class SequencerState(BaseModel):
    """
    Adaptive sequencer state for one test session.

    Transitions build a new state instead of mutating this one, so a
    session can swap its state in a single assignment.
    """

    model_config = ConfigDict(frozen=True)

    current_difficulty: Difficulty = Difficulty.EASY
    consecutive_correct: int = Field(default=0, ge=0)
    consecutive_wrong: int = Field(default=0, ge=0)

    used_question_indices: frozenset[int] = Field(default_factory=frozenset)
    presented_questions: tuple[Question, ...] = ()
    presented_indices: tuple[int, ...] = ()
    answers: tuple[AnswerRecord, ...] = ()

    # Target tier after initialization and after every answer
    difficulty_history: tuple[Difficulty, ...] = ()

    pool_exhausted: bool = False

    @property
    def current_question(self) -> Question | None:
        """The presented question still waiting for an answer, if any."""
        if len(self.presented_questions) > len(self.answers):
            return self.presented_questions[-1]
        return None

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.answers if answer.was_correct)


class TierTally(BaseModel):
    """Correct/total answers for one difficulty tier."""

    difficulty: Difficulty
    correct: int = 0
    total: int = 0


class MCQTestState(str, Enum):
    """MCQ test lifecycle states."""

    READY = "ready"  # Pool loaded, not started
    IN_PROGRESS = "in_progress"  # Waiting for answers
    COMPLETE = "complete"  # Finished, results available
    CANCELLED = "cancelled"  # Abandoned before completion


class CompletionReason(str, Enum):
    """Why a test session stopped presenting questions."""

    ALL_ANSWERED = "all_answered"
    POOL_EXHAUSTED = "pool_exhausted"
    TIME_EXPIRED = "time_expired"
    USER_ENDED = "user_ended"


class MCQTestSetup(BaseModel):
    """User's test configuration."""

    topic: str = Field(
        default="MCQ Test",
        description="Topic shown with the test"
    )
    total_questions: int = Field(
        default=10, ge=1,
        description="Number of questions to present"
    )
    seconds_per_question: int = Field(
        default=120, ge=10,
        description="Time budget per question; the test deadline is the sum"
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for tie-breaking among same-tier questions"
    )


class MCQTestSession(BaseModel):
    """Complete MCQ test session."""

    session_id: str = Field(default_factory=lambda: str(uuid4()))

    setup: MCQTestSetup
    pool: tuple[Question, ...] = Field(..., min_length=1)

    state: MCQTestState = MCQTestState.READY
    completion_reason: CompletionReason | None = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    sequencer: SequencerState = Field(default_factory=SequencerState)

    @property
    def time_limit_seconds(self) -> int:
        return self.setup.total_questions * self.setup.seconds_per_question

    @property
    def deadline(self) -> datetime | None:
        if not self.started_at:
            return None
        return self.started_at + timedelta(seconds=self.time_limit_seconds)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the test timer has run out."""
        deadline = self.deadline
        if deadline is None:
            return False
        return (now or datetime.utcnow()) >= deadline

    def get_time_remaining_seconds(self, now: datetime | None = None) -> float:
        deadline = self.deadline
        if deadline is None:
            return float(self.time_limit_seconds)
        return max(0.0, (deadline - (now or datetime.utcnow())).total_seconds())

    def should_end_test(self) -> bool:
        """Check whether no further question should be presented."""
        return (
            self.sequencer.answered_count >= self.setup.total_questions
            or self.sequencer.pool_exhausted
            or self.state in [MCQTestState.COMPLETE, MCQTestState.CANCELLED]
        )

    def get_duration_seconds(self) -> float:
        """Get test duration in seconds."""
        if not self.started_at:
            return 0.0
        end = self.completed_at or datetime.utcnow()
        return (end - self.started_at).total_seconds()
