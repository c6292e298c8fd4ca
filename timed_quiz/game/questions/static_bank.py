from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import structlog

from timed_quiz.game.questions.errors import QuestionSourceError
from timed_quiz.game.questions.types import Difficulty, Question

logger = structlog.get_logger("timed_quiz.game.questions.static_bank")

DEFAULT_QUESTIONS_PATH = Path(__file__).resolve().parent / "data" / "questions.json"


def _read_records(path: Path) -> list[Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QuestionSourceError(f"local question file is not readable: {path}") from exc
    try:
        records = json.loads(raw)
    except ValueError as exc:
        raise QuestionSourceError(f"local question file is not valid JSON: {path}") from exc
    if not isinstance(records, list):
        raise QuestionSourceError(f"local question file must contain a list: {path}")
    return records


def _to_question(record: Any) -> Question | None:
    if not isinstance(record, dict):
        return None
    text = record.get("question")
    options = record.get("options")
    correct = record.get("correct")
    if not isinstance(text, str) or not isinstance(correct, str) or not isinstance(options, list):
        return None
    if not all(isinstance(option, str) for option in options):
        return None
    try:
        difficulty = Difficulty(record.get("difficulty"))
        return Question(
            text=text,
            options=tuple(options),
            correct_option=correct,
            difficulty=difficulty,
        )
    except ValueError:
        return None


def load_questions(path: Path) -> list[Question]:
    questions: list[Question] = []
    for position, record in enumerate(_read_records(path)):
        question = _to_question(record)
        if question is None:
            logger.warning("local_question_record_invalid", path=str(path), position=position)
            continue
        questions.append(question)
    return questions


def select_questions_for_difficulty(
    questions: list[Question],
    difficulty: Difficulty,
) -> tuple[Question, ...]:
    return tuple(question for question in questions if question.difficulty is difficulty)


class LocalQuestionSource:
    """Static question bank read from a JSON file; the fallback when the API is down."""

    name = "local"

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_QUESTIONS_PATH

    @property
    def path(self) -> Path:
        return self._path

    async def fetch(self, difficulty: Difficulty) -> tuple[Question, ...]:
        questions = await asyncio.to_thread(load_questions, self._path)
        selected = select_questions_for_difficulty(questions, difficulty)
        if not selected:
            raise QuestionSourceError(f"no local questions for difficulty {difficulty.value}")
        return selected
