from __future__ import annotations

from timed_quiz.game.sessions.scoring import compute_score
from timed_quiz.game.sessions.types import SKIPPED, Verdict
from tests.game.quiz_fixtures import make_question


def _questions() -> list:
    return [
        make_question("Q0", correct_option="A"),
        make_question("Q1", correct_option="B"),
        make_question("Q2", correct_option="C"),
        make_question("Q3", correct_option="D"),
    ]


def test_compute_score_classifies_each_answer() -> None:
    result = compute_score(_questions(), {0: "A", 1: "C", 2: SKIPPED})

    assert result.verdicts == (Verdict.CORRECT, Verdict.WRONG, Verdict.SKIPPED, Verdict.WRONG)
    assert result.score == 1
    assert result.total == 4


def test_compute_score_treats_missing_answers_as_wrong() -> None:
    result = compute_score(_questions(), {})
    assert result.score == 0
    assert set(result.verdicts) == {Verdict.WRONG}


def test_compute_score_is_idempotent() -> None:
    answers = {0: "A", 1: "B", 3: SKIPPED}
    assert compute_score(_questions(), answers) == compute_score(_questions(), answers)


def test_changing_other_answers_keeps_verdict() -> None:
    first = compute_score(_questions(), {0: "A", 1: "B", 2: "A"})
    second = compute_score(_questions(), {0: "A", 1: SKIPPED, 2: "C"})
    assert first.verdicts[0] == second.verdicts[0] == Verdict.CORRECT


def test_skipped_marker_never_matches_option_text() -> None:
    questions = [make_question("Q", options=("SKIPPED", "other"), correct_option="SKIPPED")]
    assert compute_score(questions, {0: SKIPPED}).verdicts == (Verdict.SKIPPED,)
    assert compute_score(questions, {0: "SKIPPED"}).verdicts == (Verdict.CORRECT,)
