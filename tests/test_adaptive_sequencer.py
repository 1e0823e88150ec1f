import random
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from careerprep.core.adaptive_sequencer import (  # noqa: E402
    SequencerError,
    advance,
    initialize,
    next_difficulty,
    process_answer,
    record_answer,
    select_question,
    tier_tallies,
)
from careerprep.models.question import Difficulty, Question  # noqa: E402

EASY, MEDIUM, HARD = Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD


def make_question(label: str, difficulty: Difficulty) -> Question:
    return Question(
        text=f"{label}?",
        options=("A", "B", "C", "D"),
        correct_option_index=1,
        explanation=f"{label} explained",
        difficulty=difficulty,
    )


def make_pool(easy: int = 2, medium: int = 2, hard: int = 2) -> list[Question]:
    pool = []
    for difficulty, count in ((EASY, easy), (MEDIUM, medium), (HARD, hard)):
        pool.extend(make_question(f"{difficulty.value}-{i}", difficulty) for i in range(count))
    return pool


class LastChoice:
    """Random source that always picks the last candidate."""

    def choice(self, seq):
        return seq[-1]


class DifficultyTransitionTests(unittest.TestCase):
    def test_correct_answers_promote_and_cap_at_hard(self):
        self.assertEqual(next_difficulty(EASY, True), MEDIUM)
        self.assertEqual(next_difficulty(MEDIUM, True), HARD)
        self.assertEqual(next_difficulty(HARD, True), HARD)

    def test_wrong_answers_demote_and_floor_at_easy(self):
        self.assertEqual(next_difficulty(HARD, False), MEDIUM)
        self.assertEqual(next_difficulty(MEDIUM, False), EASY)
        self.assertEqual(next_difficulty(EASY, False), EASY)

    def test_single_answer_moves_at_most_one_tier(self):
        for tier in Difficulty:
            for was_correct in (True, False):
                moved = next_difficulty(tier, was_correct)
                self.assertIn(moved, set(Difficulty))
                self.assertLessEqual(abs(moved.rank - tier.rank), 1)


class SelectionTests(unittest.TestCase):
    def test_exact_tier_preferred(self):
        pool = make_pool()
        rng = random.Random(3)
        for _ in range(20):
            index = select_question(HARD, pool, set(), rng)
            self.assertEqual(pool[index].difficulty, HARD)

    def test_random_choice_goes_through_injected_source(self):
        pool = make_pool()
        self.assertEqual(select_question(EASY, pool, set(), LastChoice()), 1)
        self.assertEqual(select_question(MEDIUM, pool, set(), LastChoice()), 3)

    def test_fallback_from_easy_tries_medium_first(self):
        pool = make_pool()
        self.assertEqual(pool[select_question(EASY, pool, {0, 1}, LastChoice())].difficulty, MEDIUM)
        self.assertEqual(pool[select_question(EASY, pool, {0, 1, 2, 3}, LastChoice())].difficulty, HARD)

    def test_fallback_from_hard_tries_medium_then_easy(self):
        pool = make_pool()
        self.assertEqual(pool[select_question(HARD, pool, {4, 5}, LastChoice())].difficulty, MEDIUM)
        self.assertEqual(pool[select_question(HARD, pool, {2, 3, 4, 5}, LastChoice())].difficulty, EASY)

    def test_fallback_from_medium_tries_easy_then_hard(self):
        pool = make_pool()
        self.assertEqual(pool[select_question(MEDIUM, pool, {2, 3}, LastChoice())].difficulty, EASY)
        self.assertEqual(pool[select_question(MEDIUM, pool, {0, 1, 2, 3}, LastChoice())].difficulty, HARD)

    def test_exhaustion_returns_none(self):
        pool = make_pool()
        self.assertIsNone(select_question(EASY, pool, set(range(6))))
        self.assertIsNone(select_question(MEDIUM, [], set()))


class SequencerStateTests(unittest.TestCase):
    def test_initialize_presents_an_easy_question(self):
        state = initialize(make_pool(), random.Random(1))
        self.assertEqual(state.current_difficulty, EASY)
        self.assertEqual(state.difficulty_history, (EASY,))
        self.assertEqual(len(state.presented_questions), 1)
        self.assertEqual(state.presented_questions[0].difficulty, EASY)
        self.assertFalse(state.pool_exhausted)

    def test_initialize_empty_pool_is_exhausted(self):
        state = initialize([])
        self.assertTrue(state.pool_exhausted)
        self.assertIsNone(state.current_question)

    def test_staircase_up_from_easy(self):
        pool = make_pool(easy=3, medium=3, hard=3)
        rng = random.Random(7)
        state = initialize(pool, rng)

        state = process_answer(state, True, pool, rng)
        self.assertEqual(state.current_difficulty, MEDIUM)
        state = process_answer(state, True, pool, rng)
        self.assertEqual(state.current_difficulty, HARD)
        state = process_answer(state, True, pool, rng)
        self.assertEqual(state.current_difficulty, HARD)
        self.assertEqual(state.consecutive_correct, 3)
        self.assertEqual(state.consecutive_wrong, 0)

    def test_wrong_answers_step_down(self):
        pool = make_pool(easy=3, medium=3, hard=3)
        rng = random.Random(7)
        state = initialize(pool, rng)
        state = process_answer(state, True, pool, rng)
        state = process_answer(state, True, pool, rng)

        state = process_answer(state, False, pool, rng)
        self.assertEqual(state.current_difficulty, MEDIUM)
        self.assertEqual(state.consecutive_correct, 0)
        self.assertEqual(state.consecutive_wrong, 1)

        state = process_answer(state, False, pool, rng)
        self.assertEqual(state.current_difficulty, EASY)
        self.assertEqual(state.consecutive_wrong, 2)

    def test_transitions_do_not_mutate_previous_state(self):
        pool = make_pool()
        before = initialize(pool, random.Random(2))
        after = process_answer(before, True, pool, random.Random(2), chosen_option_index=1)

        self.assertEqual(len(before.presented_questions), 1)
        self.assertEqual(before.answers, ())
        self.assertEqual(len(after.presented_questions), 2)
        self.assertEqual(after.answers[0].chosen_option_index, 1)

    def test_never_presents_a_used_index(self):
        pool = make_pool(easy=4, medium=4, hard=4)
        rng = random.Random(11)
        outcomes = random.Random(5)
        state = initialize(pool, rng)

        while not state.pool_exhausted:
            state = process_answer(state, outcomes.random() < 0.5, pool, rng)

        self.assertEqual(len(state.presented_indices), len(pool))
        self.assertEqual(len(set(state.presented_indices)), len(pool))
        self.assertEqual(state.used_question_indices, frozenset(range(len(pool))))

    def test_no_exhaustion_within_pool_size(self):
        pool = make_pool()
        rng = random.Random(4)
        outcomes = [True, False, True, True, False]
        state = initialize(pool, rng)

        for was_correct in outcomes:
            state = process_answer(state, was_correct, pool, rng)
            self.assertFalse(state.pool_exhausted)

        self.assertEqual(len(state.presented_questions), len(pool))

    def test_answer_records_match_presented_questions(self):
        pool = make_pool()
        rng = random.Random(9)
        state = initialize(pool, rng)
        for was_correct in (True, False, True):
            state = process_answer(state, was_correct, pool, rng)

        for question, answer in zip(state.presented_questions, state.answers):
            self.assertEqual(question.difficulty, answer.difficulty)
        self.assertEqual(len(state.answers), len(state.presented_questions) - 1)

    def test_record_without_pending_question_raises(self):
        state = initialize([])
        with self.assertRaises(SequencerError):
            record_answer(state, True)

    def test_advance_with_pending_question_raises(self):
        pool = make_pool()
        state = initialize(pool, random.Random(0))
        with self.assertRaises(SequencerError):
            advance(state, pool)


class EndToEndTraceTests(unittest.TestCase):
    def test_two_per_tier_pool_trace(self):
        pool = make_pool()
        rng = random.Random(2024)
        state = initialize(pool, rng)

        answers = [True, True, False, True, False, False]
        for was_correct in answers:
            state = process_answer(state, was_correct, pool, rng)

        self.assertEqual(
            list(state.difficulty_history),
            [EASY, MEDIUM, HARD, MEDIUM, HARD, MEDIUM, EASY],
        )
        self.assertEqual(
            [q.difficulty for q in state.presented_questions],
            [EASY, MEDIUM, HARD, MEDIUM, HARD, EASY],
        )
        self.assertTrue(state.pool_exhausted)
        self.assertEqual(len(state.answers), 6)

        tallies = {t.difficulty: (t.correct, t.total) for t in tier_tallies(state)}
        self.assertEqual(tallies, {EASY: (1, 2), MEDIUM: (2, 2), HARD: (0, 2)})


if __name__ == "__main__":
    unittest.main()
