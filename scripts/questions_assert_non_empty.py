from __future__ import annotations

import asyncio

from timed_quiz.core.config import get_settings
from timed_quiz.game.questions.errors import QuestionSourceError
from timed_quiz.game.questions.static_bank import LocalQuestionSource
from timed_quiz.game.questions.types import Difficulty


async def _run() -> int:
    source = LocalQuestionSource(get_settings().local_questions_path)
    failed = 0
    for difficulty in Difficulty:
        try:
            total = len(await source.fetch(difficulty))
        except QuestionSourceError as exc:
            print(f"questions_assert_non_empty failed: difficulty={difficulty.value} error={exc}")  # noqa: T201
            failed += 1
            continue
        print(f"questions_assert_non_empty difficulty={difficulty.value} total={total}")  # noqa: T201
    return 1 if failed else 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
