"""
Adaptive Question Sequencer - staircase difficulty control for MCQ tests.

Moves the target difficulty one tier up after a correct answer and one
tier down after a wrong one, then draws an unused question from the pool
at that tier (falling back to neighbouring tiers when it runs dry).

All functions are pure: they take a SequencerState and return a new one.
The only randomness is the tie-break among candidates of the same tier,
which goes through the injected random source.
"""

import logging
import random
from collections.abc import Sequence
from typing import Protocol

from careerprep.models.mcq import SequencerState, TierTally
from careerprep.models.question import (
    AnswerRecord,
    Difficulty,
    DIFFICULTY_ORDER,
    Question,
)

logger = logging.getLogger(__name__)


class SequencerError(Exception):
    """Raised when a transition is requested that the state cannot take."""
    pass


class RandomSource(Protocol):
    """Anything with a random.Random-style choice()."""

    def choice(self, seq: Sequence[int]) -> int: ...


# Tiers to try, in order, when the target tier has no unused question left
FALLBACK_ORDER: dict[Difficulty, tuple[Difficulty, ...]] = {
    Difficulty.EASY: (Difficulty.MEDIUM, Difficulty.HARD),
    Difficulty.MEDIUM: (Difficulty.EASY, Difficulty.HARD),
    Difficulty.HARD: (Difficulty.MEDIUM, Difficulty.EASY),
}


# =============================================================================
# DIFFICULTY TRANSITIONS
# =============================================================================

def next_difficulty(current: Difficulty, was_correct: bool) -> Difficulty:
    """
    Compute the target tier after one answer.

    Correct answers promote one tier (capped at hard); wrong answers demote
    one tier (floored at easy). A single answer never moves more than one step.
    """
    rank = current.rank
    if was_correct:
        rank = min(rank + 1, len(DIFFICULTY_ORDER) - 1)
    else:
        rank = max(rank - 1, 0)
    return DIFFICULTY_ORDER[rank]


# =============================================================================
# QUESTION SELECTION
# =============================================================================

def _unused_at(
    difficulty: Difficulty,
    pool: Sequence[Question],
    used: frozenset[int] | set[int],
) -> list[int]:
    return [
        index for index, question in enumerate(pool)
        if index not in used and question.difficulty == difficulty
    ]


def select_question(
    target: Difficulty,
    pool: Sequence[Question],
    used: frozenset[int] | set[int],
    rng: RandomSource | None = None,
) -> int | None:
    """
    Pick the pool index of the next question to present.

    Order of preference:
    1. An unused question at the target tier, chosen at random.
    2. An unused question in the first fallback tier that has one,
       chosen at random within that tier.
    3. The first unused question in pool order.

    Returns:
        Pool index, or None when every question has been used.
    """
    rng = rng or random.Random()

    for tier in (target, *FALLBACK_ORDER[target]):
        candidates = _unused_at(tier, pool, used)
        if candidates:
            if tier != target:
                logger.debug(f"No unused {target.value} question, falling back to {tier.value}")
            return rng.choice(candidates)

    for index in range(len(pool)):
        if index not in used:
            return index

    return None


def _present(state: SequencerState, pool: Sequence[Question], index: int) -> SequencerState:
    return state.model_copy(update={
        "used_question_indices": state.used_question_indices | {index},
        "presented_questions": state.presented_questions + (pool[index],),
        "presented_indices": state.presented_indices + (index,),
    })


# =============================================================================
# STATE TRANSITIONS
# =============================================================================

def initialize(
    pool: Sequence[Question],
    rng: RandomSource | None = None,
) -> SequencerState:
    """
    Start a test: present one question drawn at easy difficulty.

    An empty pool produces a state that is already exhausted.
    """
    state = SequencerState(
        current_difficulty=Difficulty.EASY,
        difficulty_history=(Difficulty.EASY,),
    )
    return advance(state, pool, rng)


def record_answer(
    state: SequencerState,
    was_correct: bool,
    chosen_option_index: int | None = None,
) -> SequencerState:
    """
    Record the answer to the current question and move the target tier.

    Raises:
        SequencerError: If there is no presented question awaiting an answer
    """
    question = state.current_question
    if question is None:
        raise SequencerError("No presented question is awaiting an answer")

    if was_correct:
        consecutive_correct = state.consecutive_correct + 1
        consecutive_wrong = 0
    else:
        consecutive_correct = 0
        consecutive_wrong = state.consecutive_wrong + 1

    new_difficulty = next_difficulty(state.current_difficulty, was_correct)

    record = AnswerRecord(
        chosen_option_index=chosen_option_index,
        difficulty=question.difficulty,
        was_correct=was_correct,
    )

    return state.model_copy(update={
        "current_difficulty": new_difficulty,
        "consecutive_correct": consecutive_correct,
        "consecutive_wrong": consecutive_wrong,
        "answers": state.answers + (record,),
        "difficulty_history": state.difficulty_history + (new_difficulty,),
    })


def advance(
    state: SequencerState,
    pool: Sequence[Question],
    rng: RandomSource | None = None,
) -> SequencerState:
    """
    Present the next question at the current target tier.

    When the pool has nothing left the returned state has pool_exhausted set
    and nothing new is presented.

    Raises:
        SequencerError: If the current question has not been answered yet
    """
    if state.current_question is not None:
        raise SequencerError("Current question must be answered before advancing")

    index = select_question(state.current_difficulty, pool, state.used_question_indices, rng)
    if index is None:
        logger.info(
            f"Question pool exhausted after {len(state.presented_questions)} questions"
        )
        return state.model_copy(update={"pool_exhausted": True})

    return _present(state, pool, index)


def process_answer(
    state: SequencerState,
    was_correct: bool,
    pool: Sequence[Question],
    rng: RandomSource | None = None,
    chosen_option_index: int | None = None,
) -> SequencerState:
    """Record an answer, adjust difficulty and present the next question."""
    state = record_answer(state, was_correct, chosen_option_index)
    return advance(state, pool, rng)


# =============================================================================
# RESULTS
# =============================================================================

def tier_tallies(state: SequencerState) -> list[TierTally]:
    """Correct and total answers per difficulty tier, easy first."""
    tallies = {tier: TierTally(difficulty=tier) for tier in DIFFICULTY_ORDER}
    for answer in state.answers:
        tally = tallies[answer.difficulty]
        tally.total += 1
        if answer.was_correct:
            tally.correct += 1
    return list(tallies.values())
