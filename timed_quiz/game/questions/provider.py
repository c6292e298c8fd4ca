from __future__ import annotations

from typing import Protocol

import structlog

from timed_quiz.core.config import Settings, get_settings
from timed_quiz.game.questions.errors import QuestionSourceError, SourceUnavailableError
from timed_quiz.game.questions.remote_bank import RemoteQuestionSource
from timed_quiz.game.questions.static_bank import LocalQuestionSource
from timed_quiz.game.questions.types import Difficulty, Question

logger = structlog.get_logger("timed_quiz.game.questions.provider")


class QuestionSource(Protocol):
    name: str

    async def fetch(self, difficulty: Difficulty) -> tuple[Question, ...]: ...


class QuestionProvider:
    """Tries the primary source and falls back to the secondary one on any failure."""

    def __init__(self, primary: QuestionSource, fallback: QuestionSource) -> None:
        self._sources = (primary, fallback)

    async def fetch(self, difficulty: Difficulty) -> tuple[Question, ...]:
        for source in self._sources:
            try:
                questions = await source.fetch(difficulty)
            except QuestionSourceError as exc:
                logger.warning(
                    "question_source_failed",
                    source=source.name,
                    difficulty=difficulty.value,
                    error=str(exc),
                )
                continue
            if not questions:
                logger.warning(
                    "question_source_empty",
                    source=source.name,
                    difficulty=difficulty.value,
                )
                continue
            logger.info(
                "questions_loaded",
                source=source.name,
                difficulty=difficulty.value,
                count=len(questions),
            )
            return tuple(questions)

        logger.error("question_sources_exhausted", difficulty=difficulty.value)
        raise SourceUnavailableError(f"no question source available for difficulty {difficulty.value}")


def build_question_provider(settings: Settings | None = None) -> QuestionProvider:
    settings = settings or get_settings()
    return QuestionProvider(
        primary=RemoteQuestionSource(
            url=settings.question_api_url,
            amount=settings.question_api_amount,
            timeout_seconds=settings.question_api_timeout_seconds,
        ),
        fallback=LocalQuestionSource(settings.local_questions_path),
    )
