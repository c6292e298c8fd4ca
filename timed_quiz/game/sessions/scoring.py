from __future__ import annotations

from typing import Mapping, Sequence

from timed_quiz.game.questions.types import Question
from timed_quiz.game.sessions.types import SKIPPED, Answer, ScoreResult, Verdict


def verdict_for(question: Question, answer: Answer | None) -> Verdict:
    if answer is SKIPPED:
        return Verdict.SKIPPED
    if answer == question.correct_option:
        return Verdict.CORRECT
    return Verdict.WRONG


def compute_score(questions: Sequence[Question], answers: Mapping[int, Answer]) -> ScoreResult:
    """Classify every question; a missing answer counts as wrong, never as an error."""
    verdicts = tuple(verdict_for(question, answers.get(index)) for index, question in enumerate(questions))
    return ScoreResult(
        score=sum(1 for verdict in verdicts if verdict is Verdict.CORRECT),
        verdicts=verdicts,
    )
