from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Union

from timed_quiz.game.questions.types import Difficulty, Question


class QuizPhase(str, Enum):
    LOADING = "loading"
    ANSWERING = "answering"
    FINISHED = "finished"
    FAILED = "failed"


class AnswerMark(Enum):
    SKIPPED = "SKIPPED"


SKIPPED = AnswerMark.SKIPPED

Answer = Union[str, AnswerMark]


class Verdict(str, Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class QuizSnapshot:
    phase: QuizPhase
    current_index: int
    total_questions: int
    current_question: Question | None
    pending_selection: str | None
    answers: Mapping[int, Answer] = field(default_factory=dict)
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ScoreResult:
    score: int
    verdicts: tuple[Verdict, ...]

    @property
    def total(self) -> int:
        return len(self.verdicts)


@dataclass(frozen=True, slots=True)
class QuizResults:
    difficulty: Difficulty | None
    questions: tuple[Question, ...]
    answers: Mapping[int, Answer]
    score: ScoreResult


@dataclass(frozen=True, slots=True)
class QuizStateView:
    snapshot: QuizSnapshot
    difficulty: Difficulty | None
    time_left: int
