from __future__ import annotations

import asyncio

import pytest

from timed_quiz.game.questions.types import Difficulty, Question
from timed_quiz.game.sessions.controller import LOAD_FAILED_MESSAGE, QuizController
from timed_quiz.game.sessions.errors import ResultsNotReadyError
from timed_quiz.game.sessions.types import SKIPPED, QuizPhase, Verdict
from tests.game.quiz_fixtures import FailingProvider, StaticProvider, make_question, two_question_set


class _GatedProvider:
    """Answers each request only when its gate is released, in any order."""

    def __init__(self) -> None:
        self.gates: dict[Difficulty, asyncio.Event] = {}
        self.questions: dict[Difficulty, tuple[Question, ...]] = {}

    def prepare(self, difficulty: Difficulty, text: str) -> None:
        self.gates[difficulty] = asyncio.Event()
        self.questions[difficulty] = (make_question(text, difficulty=difficulty),)

    async def fetch(self, difficulty: Difficulty) -> tuple[Question, ...]:
        await self.gates[difficulty].wait()
        return self.questions[difficulty]


@pytest.mark.asyncio
async def test_select_difficulty_loads_questions_and_starts_timer() -> None:
    provider = StaticProvider(two_question_set())
    controller = QuizController(provider, time_limit_seconds=30)

    await controller.select_difficulty(Difficulty.MEDIUM)
    state = controller.state()

    assert provider.calls == [Difficulty.MEDIUM]
    assert state.snapshot.phase is QuizPhase.ANSWERING
    assert state.difficulty is Difficulty.MEDIUM
    assert state.time_left == 30
    controller.close()


@pytest.mark.asyncio
async def test_select_difficulty_fails_when_sources_are_exhausted() -> None:
    controller = QuizController(FailingProvider(), time_limit_seconds=30)

    await controller.select_difficulty(Difficulty.HARD)
    state = controller.state()

    assert state.snapshot.phase is QuizPhase.FAILED
    assert state.snapshot.error == LOAD_FAILED_MESSAGE
    assert state.time_left == 0


@pytest.mark.asyncio
async def test_empty_question_set_is_treated_as_failure() -> None:
    controller = QuizController(StaticProvider(()), time_limit_seconds=30)

    await controller.select_difficulty(Difficulty.EASY)

    assert controller.session.phase is QuizPhase.FAILED
    assert controller.session.error == LOAD_FAILED_MESSAGE


@pytest.mark.asyncio
async def test_stale_provider_response_is_dropped() -> None:
    provider = _GatedProvider()
    provider.prepare(Difficulty.EASY, "easy question")
    provider.prepare(Difficulty.HARD, "hard question")
    controller = QuizController(provider, time_limit_seconds=30)

    first = asyncio.create_task(controller.select_difficulty(Difficulty.EASY))
    await asyncio.sleep(0)
    second = asyncio.create_task(controller.select_difficulty(Difficulty.HARD))
    await asyncio.sleep(0)
    assert controller.session.phase is QuizPhase.LOADING

    provider.gates[Difficulty.HARD].set()
    await second
    provider.gates[Difficulty.EASY].set()
    await first

    question = controller.session.current_question
    assert question is not None
    assert question.text == "hard question"
    assert controller.difficulty is Difficulty.HARD
    controller.close()


@pytest.mark.asyncio
async def test_timeout_auto_advances_with_pending_selection() -> None:
    controller = QuizController(StaticProvider(two_question_set()), time_limit_seconds=0.1)
    await controller.select_difficulty(Difficulty.EASY)

    controller.select_option("B")
    await asyncio.sleep(0.15)

    assert controller.session.answers == {0: "B"}
    assert controller.session.current_index == 1
    controller.close()


@pytest.mark.asyncio
async def test_skip_rebinds_timer_without_stale_expiry() -> None:
    questions = (make_question("Q0"), make_question("Q1"), make_question("Q2"))
    controller = QuizController(StaticProvider(questions), time_limit_seconds=0.2)
    await controller.select_difficulty(Difficulty.EASY)

    await asyncio.sleep(0.12)
    controller.skip()
    await asyncio.sleep(0.12)

    # The first countdown would have expired by now; question 1 must be untouched.
    assert controller.session.current_index == 1
    assert controller.session.answers == {0: SKIPPED}

    await asyncio.sleep(0.15)
    assert controller.session.current_index == 2
    assert controller.session.answers == {0: SKIPPED, 1: SKIPPED}
    controller.close()


@pytest.mark.asyncio
async def test_full_run_until_results() -> None:
    controller = QuizController(StaticProvider(two_question_set()), time_limit_seconds=30)
    await controller.select_difficulty(Difficulty.EASY)

    with pytest.raises(ResultsNotReadyError):
        controller.results()

    controller.select_option("A")
    controller.confirm_and_advance()
    controller.select_option("C")
    controller.confirm_and_advance()

    state = controller.state()
    assert state.snapshot.phase is QuizPhase.FINISHED
    assert state.time_left == 0

    results = controller.results()
    assert results.score.score == 1
    assert results.score.verdicts == (Verdict.CORRECT, Verdict.WRONG)
    assert results.difficulty is Difficulty.EASY


@pytest.mark.asyncio
async def test_finished_quiz_does_not_time_out() -> None:
    controller = QuizController(StaticProvider((make_question("only"),)), time_limit_seconds=0.05)
    await controller.select_difficulty(Difficulty.EASY)

    controller.skip()
    await asyncio.sleep(0.1)

    assert controller.session.phase is QuizPhase.FINISHED
    assert controller.session.answers == {0: SKIPPED}


@pytest.mark.asyncio
async def test_restart_returns_to_first_question_with_fresh_timer() -> None:
    controller = QuizController(StaticProvider(two_question_set()), time_limit_seconds=30)
    await controller.select_difficulty(Difficulty.EASY)
    controller.skip()
    controller.skip()

    controller.restart(reset_answers=True)
    state = controller.state()

    assert state.snapshot.phase is QuizPhase.ANSWERING
    assert state.snapshot.current_index == 0
    assert state.snapshot.answers == {}
    assert state.time_left == 30
    controller.close()
