from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Request

from timed_quiz.core.config import get_settings
from timed_quiz.game.questions.types import Difficulty
from timed_quiz.game.sessions.controller import QuizController
from timed_quiz.game.sessions.errors import ResultsNotReadyError
from timed_quiz.game.sessions.types import SKIPPED, QuizResults, QuizStateView

from .quiz_models import (
    DifficultyRequest,
    QuestionView,
    QuizResultsResponse,
    QuizStateResponse,
    RestartRequest,
    ResultItem,
    SelectOptionRequest,
)

router = APIRouter(prefix="/quiz", tags=["quiz"])
logger = structlog.get_logger("timed_quiz.api.routes.quiz")


def _controller(request: Request) -> QuizController:
    return request.app.state.quiz_controller


def _state_response(view: QuizStateView) -> QuizStateResponse:
    snapshot = view.snapshot
    question = snapshot.current_question
    return QuizStateResponse(
        phase=snapshot.phase.value,
        difficulty=view.difficulty,
        current_index=snapshot.current_index,
        total_questions=snapshot.total_questions,
        question=(
            QuestionView(
                text=question.text,
                options=list(question.options),
                difficulty=question.difficulty,
            )
            if question is not None
            else None
        ),
        pending_selection=snapshot.pending_selection,
        time_left=view.time_left,
        answered=len(snapshot.answers),
        error=snapshot.error,
    )


def _results_response(results: QuizResults) -> QuizResultsResponse:
    items: list[ResultItem] = []
    for index, (question, verdict) in enumerate(zip(results.questions, results.score.verdicts)):
        answer = results.answers.get(index)
        items.append(
            ResultItem(
                index=index,
                question=question.text,
                options=list(question.options),
                correct_option=question.correct_option,
                answer=None if answer is None or answer is SKIPPED else answer,
                skipped=answer is SKIPPED,
                verdict=verdict.value,
            )
        )
    return QuizResultsResponse(
        difficulty=results.difficulty,
        score=results.score.score,
        total=results.score.total,
        items=items,
    )


@router.get("/state", response_model=QuizStateResponse)
async def get_state(request: Request) -> QuizStateResponse:
    return _state_response(_controller(request).state())


@router.post("/difficulty", response_model=QuizStateResponse)
async def select_difficulty(payload: DifficultyRequest, request: Request) -> QuizStateResponse:
    difficulty = payload.difficulty or Difficulty(get_settings().default_difficulty)
    controller = _controller(request)
    await controller.select_difficulty(difficulty)
    return _state_response(controller.state())


@router.post("/select", response_model=QuizStateResponse)
async def select_option(payload: SelectOptionRequest, request: Request) -> QuizStateResponse:
    controller = _controller(request)
    controller.select_option(payload.option)
    return _state_response(controller.state())


@router.post("/next", response_model=QuizStateResponse)
async def confirm_and_advance(request: Request) -> QuizStateResponse:
    controller = _controller(request)
    controller.confirm_and_advance()
    return _state_response(controller.state())


@router.post("/skip", response_model=QuizStateResponse)
async def skip(request: Request) -> QuizStateResponse:
    controller = _controller(request)
    controller.skip()
    return _state_response(controller.state())


@router.post("/restart", response_model=QuizStateResponse)
async def restart(payload: RestartRequest, request: Request) -> QuizStateResponse:
    controller = _controller(request)
    controller.restart(reset_answers=payload.reset_answers)
    return _state_response(controller.state())


@router.get("/results", response_model=QuizResultsResponse)
async def get_results(request: Request) -> QuizResultsResponse:
    try:
        results = _controller(request).results()
    except ResultsNotReadyError as exc:
        raise HTTPException(status_code=409, detail={"code": "E_QUIZ_NOT_FINISHED"}) from exc
    logger.info("quiz_results_served", score=results.score.score, total=results.score.total)
    return _results_response(results)
