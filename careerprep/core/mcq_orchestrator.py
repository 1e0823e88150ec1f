"""
MCQ Test Orchestrator - State machine for managing adaptive test sessions.

Owns the session store and all side effects around the adaptive
sequencer: grading answers, capping the number of questions, enforcing
the test timer and compiling results.
"""

import logging
import random
from datetime import datetime
from typing import Any, Awaitable, Callable

from careerprep.core import adaptive_sequencer
from careerprep.models.mcq import (
    CompletionReason,
    MCQTestSession,
    MCQTestSetup,
    MCQTestState,
)
from careerprep.models.question import Question

logger = logging.getLogger(__name__)


class StateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


class SessionNotFoundError(Exception):
    """Raised when a session ID is unknown."""
    pass


class MCQTestOrchestrator:
    """
    Manages the MCQ test lifecycle using a state machine pattern.

    States:
        READY → IN_PROGRESS → COMPLETE
          ↓          ↓
        CANCELLED  CANCELLED

    Sessions are kept in memory and discarded with the process.
    """

    VALID_TRANSITIONS: dict[MCQTestState, list[MCQTestState]] = {
        MCQTestState.READY: [MCQTestState.IN_PROGRESS, MCQTestState.CANCELLED],
        MCQTestState.IN_PROGRESS: [MCQTestState.COMPLETE, MCQTestState.CANCELLED],
        MCQTestState.COMPLETE: [],  # Terminal state
        MCQTestState.CANCELLED: [],  # Terminal state
    }

    def __init__(self, clock: Callable[[], datetime] = datetime.utcnow):
        """
        Initialize the orchestrator.

        Args:
            clock: Source of the current time, replaceable in tests
        """
        self.clock = clock

        self._sessions: dict[str, MCQTestSession] = {}
        self._rngs: dict[str, random.Random] = {}

        self._state_change_callbacks: list[
            Callable[[str, MCQTestState, MCQTestState], Awaitable[None]]
        ] = []

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    async def create_session(
        self,
        setup: MCQTestSetup,
        pool: list[Question],
    ) -> MCQTestSession:
        """
        Create a new test session over a question pool.

        The number of questions is clamped to the pool size.

        Raises:
            ValueError: If the pool is empty
        """
        if not pool:
            raise ValueError("Question pool is empty")

        if setup.total_questions > len(pool):
            logger.info(
                f"Requested {setup.total_questions} questions but pool has {len(pool)}, clamping"
            )
            setup = setup.model_copy(update={"total_questions": len(pool)})

        session = MCQTestSession(setup=setup, pool=tuple(pool))

        self._sessions[session.session_id] = session
        self._rngs[session.session_id] = random.Random(setup.random_seed)

        logger.info(
            f"Created MCQ session {session.session_id} on '{setup.topic}' "
            f"({setup.total_questions} of {len(pool)} questions)"
        )
        return session

    def get_session(self, session_id: str) -> MCQTestSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def _require_session(self, session_id: str) -> MCQTestSession:
        session = self.get_session(session_id)
        if not session:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    async def update_session(self, session: MCQTestSession) -> None:
        """Update a session in storage."""
        self._sessions[session.session_id] = session

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    async def transition_state(
        self,
        session_id: str,
        new_state: MCQTestState,
        reason: CompletionReason | None = None,
    ) -> MCQTestSession:
        """
        Transition a session to a new state.

        Raises:
            SessionNotFoundError: If the session does not exist
            StateTransitionError: If the transition is invalid
        """
        session = self._require_session(session_id)
        old_state = session.state

        valid_next_states = self.VALID_TRANSITIONS.get(old_state, [])
        if new_state not in valid_next_states:
            raise StateTransitionError(
                f"Invalid transition from {old_state.value} to {new_state.value}. "
                f"Valid transitions: {[s.value for s in valid_next_states]}"
            )

        session.state = new_state
        if new_state == MCQTestState.IN_PROGRESS:
            session.started_at = self.clock()
        elif new_state in (MCQTestState.COMPLETE, MCQTestState.CANCELLED):
            session.completed_at = self.clock()
            session.completion_reason = reason

        await self.update_session(session)

        for callback in self._state_change_callbacks:
            try:
                await callback(session_id, old_state, new_state)
            except Exception as e:
                logger.error(f"State change callback error: {e}")

        logger.info(f"Session {session_id}: {old_state.value} → {new_state.value}")
        return session

    # =========================================================================
    # TEST FLOW
    # =========================================================================

    async def start_test(self, session_id: str) -> dict[str, Any]:
        """
        Start the test and present the first (easy) question.

        Returns:
            First question payload
        """
        session = self._require_session(session_id)
        if session.state != MCQTestState.READY:
            raise StateTransitionError(f"Cannot start test in state: {session.state.value}")

        session.sequencer = adaptive_sequencer.initialize(
            session.pool, self._rngs[session_id]
        )
        await self.transition_state(session_id, MCQTestState.IN_PROGRESS)

        return self._question_payload(session)

    async def submit_answer(
        self,
        session_id: str,
        chosen_option_index: int | None,
    ) -> dict[str, Any]:
        """
        Grade the current question and decide what comes next.

        A None answer skips the question and counts as wrong.

        Returns:
            Feedback on the answer plus the next question, or a completion notice
        """
        session = self._require_session(session_id)
        if session.state != MCQTestState.IN_PROGRESS:
            raise StateTransitionError(
                f"Cannot submit answer in state: {session.state.value}"
            )

        if session.is_expired(self.clock()):
            logger.info(f"Session {session_id}: time expired before answer was recorded")
            await self._complete(session, CompletionReason.TIME_EXPIRED)
            return {
                "action": "complete",
                "reason": CompletionReason.TIME_EXPIRED.value,
                "message": "Time is up",
            }

        question = session.sequencer.current_question
        if question is None:
            raise StateTransitionError("No active question")

        was_correct = question.is_correct(chosen_option_index)
        session.sequencer = adaptive_sequencer.record_answer(
            session.sequencer, was_correct, chosen_option_index
        )

        feedback = {
            "was_correct": was_correct,
            "chosen_option_index": chosen_option_index,
            "correct_option_index": question.correct_option_index,
            "explanation": question.explanation,
            "next_difficulty": session.sequencer.current_difficulty.value,
        }

        # The question cap is enforced here, never by the sequencer itself
        if session.should_end_test():
            await self._complete(session, CompletionReason.ALL_ANSWERED)
            return {"action": "complete", "reason": CompletionReason.ALL_ANSWERED.value, **feedback}

        session.sequencer = adaptive_sequencer.advance(
            session.sequencer, session.pool, self._rngs[session_id]
        )
        if session.should_end_test():
            await self._complete(session, CompletionReason.POOL_EXHAUSTED)
            return {"action": "complete", "reason": CompletionReason.POOL_EXHAUSTED.value, **feedback}

        await self.update_session(session)
        return {"action": "question", **feedback, "next_question": self._question_payload(session)}

    async def end_test(self, session_id: str) -> dict[str, Any]:
        """
        End the test early at the candidate's request.

        Returns:
            Completion status
        """
        session = self._require_session(session_id)

        if session.state == MCQTestState.READY:
            await self.transition_state(session_id, MCQTestState.CANCELLED, CompletionReason.USER_ENDED)
        else:
            await self._complete(session, CompletionReason.USER_ENDED)

        return {
            "action": "ended",
            "state": session.state.value,
            "questions_answered": session.sequencer.answered_count,
        }

    async def _complete(self, session: MCQTestSession, reason: CompletionReason) -> None:
        await self.transition_state(session.session_id, MCQTestState.COMPLETE, reason)

    # =========================================================================
    # RESULTS
    # =========================================================================

    def get_status(self, session_id: str) -> dict[str, Any]:
        """Progress summary for a session."""
        session = self._require_session(session_id)
        return {
            "session_id": session.session_id,
            "state": session.state.value,
            "topic": session.setup.topic,
            "questions_answered": session.sequencer.answered_count,
            "total_questions": session.setup.total_questions,
            "current_difficulty": session.sequencer.current_difficulty.value,
            "time_remaining_seconds": session.get_time_remaining_seconds(self.clock()),
        }

    def get_results(self, session_id: str) -> dict[str, Any]:
        """
        Compile the results of a completed test.

        Raises:
            StateTransitionError: If the test is not complete
        """
        session = self._require_session(session_id)
        if session.state != MCQTestState.COMPLETE:
            raise StateTransitionError("Test must be complete to view results")

        sequencer = session.sequencer
        total = session.setup.total_questions
        score = sequencer.correct_count

        # The question on screen when the test ended has no answer record
        review = []
        for number, question in enumerate(sequencer.presented_questions, start=1):
            answer = (
                sequencer.answers[number - 1]
                if number <= len(sequencer.answers) else None
            )
            review.append({
                "number": number,
                "question": question.text,
                "options": list(question.options),
                "difficulty": question.difficulty.value,
                "chosen_option_index": answer.chosen_option_index if answer else None,
                "correct_option_index": question.correct_option_index,
                "was_correct": answer.was_correct if answer else False,
                "explanation": question.explanation,
            })

        return {
            "session_id": session.session_id,
            "topic": session.setup.topic,
            "completion_reason": session.completion_reason.value if session.completion_reason else None,
            "score": score,
            "total_questions": total,
            "questions_answered": sequencer.answered_count,
            "percentage": round(score / total * 100, 1) if total else 0.0,
            "difficulty_history": [d.value for d in sequencer.difficulty_history],
            "tier_tallies": [
                tally.model_dump(mode="json")
                for tally in adaptive_sequencer.tier_tallies(sequencer)
            ],
            "questions": review,
            "duration_seconds": session.get_duration_seconds(),
        }

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _question_payload(self, session: MCQTestSession) -> dict[str, Any]:
        question = session.sequencer.current_question
        if question is None:
            return {"action": "complete", "message": "No questions available"}

        return {
            "action": "question",
            "question_number": len(session.sequencer.presented_questions),
            "total_questions": session.setup.total_questions,
            **question.to_public_dict(),
            "time_remaining_seconds": session.get_time_remaining_seconds(self.clock()),
        }

    # =========================================================================
    # EVENT CALLBACKS
    # =========================================================================

    def on_state_change(
        self,
        callback: Callable[[str, MCQTestState, MCQTestState], Awaitable[None]]
    ) -> None:
        """Register a callback for state changes."""
        self._state_change_callbacks.append(callback)
