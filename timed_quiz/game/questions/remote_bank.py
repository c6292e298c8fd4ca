from __future__ import annotations

import html
import random
from typing import Any

import httpx

from timed_quiz.game.questions.errors import QuestionSourceError
from timed_quiz.game.questions.types import Difficulty, Question

OPEN_TRIVIA_RESPONSE_OK = 0
QUESTION_TYPE_MULTIPLE = "multiple"


def _decode(value: Any) -> str:
    if not isinstance(value, str):
        raise QuestionSourceError("question api returned a non-text field")
    return html.unescape(value)


def _to_question(result: Any, *, difficulty: Difficulty, rng: random.Random) -> Question:
    if not isinstance(result, dict):
        raise QuestionSourceError("question api returned a malformed result")
    incorrect = result.get("incorrect_answers")
    if not isinstance(incorrect, list):
        raise QuestionSourceError("question api result has no incorrect answers")

    correct_option = _decode(result.get("correct_answer"))
    options = [_decode(option) for option in incorrect]
    options.append(correct_option)
    rng.shuffle(options)
    try:
        return Question(
            text=_decode(result.get("question")),
            options=tuple(options),
            correct_option=correct_option,
            difficulty=difficulty,
        )
    except ValueError as exc:
        raise QuestionSourceError(f"question api result is invalid: {exc}") from exc


def parse_payload(
    payload: Any,
    *,
    difficulty: Difficulty,
    rng: random.Random,
) -> tuple[Question, ...]:
    if not isinstance(payload, dict):
        raise QuestionSourceError("question api payload is not an object")
    response_code = payload.get("response_code", OPEN_TRIVIA_RESPONSE_OK)
    if response_code != OPEN_TRIVIA_RESPONSE_OK:
        raise QuestionSourceError(f"question api returned response_code={response_code}")
    results = payload.get("results")
    if not isinstance(results, list) or not results:
        raise QuestionSourceError("question api returned no results")
    return tuple(_to_question(result, difficulty=difficulty, rng=rng) for result in results)


class RemoteQuestionSource:
    """Open Trivia DB style API; options come back shuffled and entity-decoded."""

    name = "remote"

    def __init__(
        self,
        *,
        url: str,
        amount: int,
        timeout_seconds: float,
        rng: random.Random | None = None,
    ) -> None:
        self._url = url
        self._amount = amount
        self._timeout_seconds = timeout_seconds
        self._rng = rng or random.Random()

    async def fetch(self, difficulty: Difficulty) -> tuple[Question, ...]:
        params = {
            "amount": self._amount,
            "type": QUESTION_TYPE_MULTIPLE,
            "difficulty": difficulty.value,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(self._url, params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise QuestionSourceError(f"question api request failed: {exc}") from exc
        return parse_payload(payload, difficulty=difficulty, rng=self._rng)
