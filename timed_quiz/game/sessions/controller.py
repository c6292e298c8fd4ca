from __future__ import annotations

from typing import Protocol

import structlog

from timed_quiz.game.questions.errors import SourceUnavailableError
from timed_quiz.game.questions.types import Difficulty, Question
from timed_quiz.game.sessions.errors import EmptyQuestionSetError, ResultsNotReadyError
from timed_quiz.game.sessions.scoring import compute_score
from timed_quiz.game.sessions.session import QuizSession
from timed_quiz.game.sessions.timer import QuestionTimer
from timed_quiz.game.sessions.types import QuizPhase, QuizResults, QuizStateView

logger = structlog.get_logger("timed_quiz.game.sessions.controller")

LOAD_FAILED_MESSAGE = "Could not load questions. Please try again later."


class _QuestionProvider(Protocol):
    async def fetch(self, difficulty: Difficulty) -> tuple[Question, ...]: ...


class QuizController:
    """Dispatches user intents and timer expiry into one ``QuizSession``.

    Each provider request gets a sequence number; a response whose number is
    no longer the latest is dropped. The timer is rebound after every intent
    that can change the current question, always stopping the old countdown
    before a new one is started.
    """

    def __init__(
        self,
        provider: _QuestionProvider,
        *,
        time_limit_seconds: float,
        session: QuizSession | None = None,
        timer: QuestionTimer | None = None,
    ) -> None:
        self._provider = provider
        self._time_limit_seconds = time_limit_seconds
        self._session = session or QuizSession()
        self._timer = timer or QuestionTimer()
        self._difficulty: Difficulty | None = None
        self._request_seq = 0
        self._bound_index: int | None = None

    @property
    def session(self) -> QuizSession:
        return self._session

    @property
    def difficulty(self) -> Difficulty | None:
        return self._difficulty

    async def select_difficulty(self, difficulty: Difficulty) -> None:
        self._unbind_timer()
        self._request_seq += 1
        request_seq = self._request_seq
        self._difficulty = difficulty
        self._session.begin_loading()
        logger.info("quiz_questions_requested", difficulty=difficulty.value, request_seq=request_seq)

        try:
            questions = await self._provider.fetch(difficulty)
        except SourceUnavailableError:
            if self._is_stale(request_seq, difficulty):
                return
            self._session.fail(LOAD_FAILED_MESSAGE)
            return

        if self._is_stale(request_seq, difficulty):
            return
        try:
            self._session.initialize(questions)
        except EmptyQuestionSetError:
            logger.warning("quiz_question_set_empty", difficulty=difficulty.value)
            self._session.fail(LOAD_FAILED_MESSAGE)
            return
        self._rebind_timer()

    def select_option(self, option: str) -> None:
        self._session.select_option(option)

    def confirm_and_advance(self) -> None:
        self._session.confirm_and_advance()
        self._rebind_timer()

    def skip(self) -> None:
        self._session.skip()
        self._rebind_timer()

    def restart(self, *, reset_answers: bool = True) -> None:
        self._session.restart(reset_answers=reset_answers)
        self._rebind_timer(force=True)

    def close(self) -> None:
        self._unbind_timer()

    def state(self) -> QuizStateView:
        snapshot = self._session.snapshot()
        time_left = self._timer.remaining_seconds if snapshot.phase is QuizPhase.ANSWERING else 0
        return QuizStateView(snapshot=snapshot, difficulty=self._difficulty, time_left=time_left)

    def results(self) -> QuizResults:
        if self._session.phase is not QuizPhase.FINISHED:
            raise ResultsNotReadyError("quiz is not finished")
        questions = self._session.questions
        answers = self._session.answers
        return QuizResults(
            difficulty=self._difficulty,
            questions=questions,
            answers=answers,
            score=compute_score(questions, answers),
        )

    def _is_stale(self, request_seq: int, difficulty: Difficulty) -> bool:
        if request_seq == self._request_seq:
            return False
        logger.info(
            "quiz_stale_questions_dropped",
            difficulty=difficulty.value,
            request_seq=request_seq,
            latest_request_seq=self._request_seq,
        )
        return True

    def _on_time_up(self, bound_index: int) -> None:
        if self._session.phase is not QuizPhase.ANSWERING or self._session.current_index != bound_index:
            logger.debug("quiz_stale_expiry_ignored", bound_index=bound_index)
            return
        self._bound_index = None
        logger.info("quiz_question_timed_out", index=bound_index)
        self._session.time_up()
        self._rebind_timer()

    def _rebind_timer(self, *, force: bool = False) -> None:
        if self._session.phase is not QuizPhase.ANSWERING:
            self._unbind_timer()
            return
        index = self._session.current_index
        if not force and self._bound_index == index and self._timer.is_running:
            return
        self._unbind_timer()
        self._bound_index = index
        self._timer.start(self._time_limit_seconds, lambda: self._on_time_up(index))

    def _unbind_timer(self) -> None:
        self._timer.stop()
        self._bound_index = None
