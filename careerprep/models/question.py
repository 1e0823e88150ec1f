"""
Question models for CareerPrep
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    """Question difficulty tiers, ordered easy < medium < hard."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        """Position of the tier in the easy < medium < hard ordering."""
        return DIFFICULTY_ORDER.index(self)

    @property
    def display_name(self) -> str:
        """Human-readable tier name."""
        return self.value.capitalize()


DIFFICULTY_ORDER: tuple[Difficulty, ...] = (
    Difficulty.EASY,
    Difficulty.MEDIUM,
    Difficulty.HARD,
)


class Question(BaseModel):
    """A single multiple choice question in a test pool."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="The question text")
    options: tuple[str, str, str, str] = Field(
        ...,
        description="Exactly four answer options, in display order"
    )
    correct_option_index: int = Field(
        ..., ge=0, le=3,
        description="Zero-based index of the correct option"
    )
    explanation: str = Field(
        default="No explanation provided.",
        description="Why the correct option is correct"
    )
    difficulty: Difficulty = Field(..., description="Difficulty tier")

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Question text must not be blank")
        return value

    def is_correct(self, chosen_option_index: int | None) -> bool:
        """Check a chosen option against the answer key. Unanswered is wrong."""
        return chosen_option_index is not None and chosen_option_index == self.correct_option_index

    def to_public_dict(self) -> dict:
        """Question payload safe to show before the candidate answers."""
        return {
            "text": self.text,
            "options": list(self.options),
            "difficulty": self.difficulty.value,
        }


class AnswerRecord(BaseModel):
    """Outcome of one presented question. Created once, never modified."""

    model_config = ConfigDict(frozen=True)

    chosen_option_index: int | None = Field(
        default=None, ge=0, le=3,
        description="Option picked by the candidate, None when skipped"
    )
    difficulty: Difficulty = Field(..., description="Tier of the answered question")
    was_correct: bool
