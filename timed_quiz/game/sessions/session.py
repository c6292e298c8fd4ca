from __future__ import annotations

from typing import Sequence

import structlog

from timed_quiz.game.questions.types import Question
from timed_quiz.game.sessions.errors import EmptyQuestionSetError
from timed_quiz.game.sessions.types import SKIPPED, Answer, QuizPhase, QuizSnapshot

logger = structlog.get_logger("timed_quiz.game.sessions.session")


class QuizSession:
    """State machine for one pass over a fixed question list.

    Phases go ``loading -> answering -> finished`` (or ``loading -> failed``).
    While answering, a chosen option is only *pending* until it is confirmed,
    skipped over or the question times out; every path that leaves a question
    goes through ``_finalize_and_advance``. Intents that do not fit the current
    phase are ignored.
    """

    def __init__(self) -> None:
        self._questions: tuple[Question, ...] = ()
        self._current_index = 0
        self._answers: dict[int, Answer] = {}
        self._pending: str | None = None
        self._phase = QuizPhase.LOADING
        self._error: str | None = None

    @property
    def phase(self) -> QuizPhase:
        return self._phase

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def answers(self) -> dict[int, Answer]:
        return dict(self._answers)

    @property
    def pending_selection(self) -> str | None:
        return self._pending

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def current_question(self) -> Question | None:
        if self._phase is not QuizPhase.ANSWERING:
            return None
        return self._questions[self._current_index]

    def begin_loading(self) -> None:
        self._questions = ()
        self._current_index = 0
        self._answers = {}
        self._pending = None
        self._error = None
        self._phase = QuizPhase.LOADING

    def fail(self, reason: str) -> None:
        if self._phase is not QuizPhase.LOADING:
            logger.debug("quiz_intent_ignored", intent="fail", phase=self._phase.value)
            return
        self._error = reason
        self._phase = QuizPhase.FAILED

    def initialize(self, questions: Sequence[Question]) -> None:
        if not questions:
            raise EmptyQuestionSetError("quiz needs at least one question")
        self._questions = tuple(questions)
        self._current_index = 0
        self._answers = {}
        self._pending = None
        self._error = None
        self._phase = QuizPhase.ANSWERING

    def select_option(self, option: str) -> None:
        question = self.current_question
        if question is None:
            logger.debug("quiz_intent_ignored", intent="select_option", phase=self._phase.value)
            return
        if option not in question.options:
            logger.debug("quiz_option_unknown", index=self._current_index)
            return
        self._pending = option

    def confirm_and_advance(self) -> None:
        if self._phase is not QuizPhase.ANSWERING or self._pending is None:
            logger.debug("quiz_intent_ignored", intent="confirm_and_advance", phase=self._phase.value)
            return
        self._finalize_and_advance(self._pending)

    def skip(self) -> None:
        if self._phase is not QuizPhase.ANSWERING:
            logger.debug("quiz_intent_ignored", intent="skip", phase=self._phase.value)
            return
        self._finalize_and_advance(SKIPPED)

    def time_up(self) -> None:
        if self._phase is not QuizPhase.ANSWERING:
            logger.debug("quiz_intent_ignored", intent="time_up", phase=self._phase.value)
            return
        self._finalize_and_advance(self._pending if self._pending is not None else SKIPPED)

    def restart(self, *, reset_answers: bool = True) -> None:
        if not self._questions:
            logger.debug("quiz_intent_ignored", intent="restart", phase=self._phase.value)
            return
        if reset_answers:
            self._answers = {}
        self._current_index = 0
        self._phase = QuizPhase.ANSWERING
        self._pending = self._restored_selection(0)

    def snapshot(self) -> QuizSnapshot:
        return QuizSnapshot(
            phase=self._phase,
            current_index=self._current_index,
            total_questions=len(self._questions),
            current_question=self.current_question,
            pending_selection=self._pending,
            answers=dict(self._answers),
            error=self._error,
        )

    def _finalize_and_advance(self, answer: Answer) -> None:
        self._answers[self._current_index] = answer
        self._pending = None
        if self._current_index >= len(self._questions) - 1:
            self._current_index = len(self._questions)
            self._phase = QuizPhase.FINISHED
            return
        self._current_index += 1
        self._pending = self._restored_selection(self._current_index)

    def _restored_selection(self, index: int) -> str | None:
        previous = self._answers.get(index)
        if previous is None or previous is SKIPPED:
            return None
        return previous
