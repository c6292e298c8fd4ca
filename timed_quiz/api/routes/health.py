from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from timed_quiz.core.config import get_settings
from timed_quiz.game.questions.static_bank import LocalQuestionSource
from timed_quiz.game.questions.types import Difficulty

router = APIRouter(tags=["health"])


def _ok_check(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "ok"}
    if extra:
        payload.update(extra)
    return payload


def _failed_check(error: str) -> dict[str, str]:
    return {"status": "failed", "error": error}


async def _check_local_questions() -> dict[str, Any]:
    source = LocalQuestionSource(get_settings().local_questions_path)
    try:
        counts = {difficulty.value: len(await source.fetch(difficulty)) for difficulty in Difficulty}
    except Exception as exc:
        return _failed_check(str(exc))
    return _ok_check({"questions": counts})


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "live"}


@router.get("/health")
async def health() -> JSONResponse:
    checks = {"local_questions": await _check_local_questions()}
    is_healthy = all(check.get("status") == "ok" for check in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if is_healthy else "degraded",
            "checks": checks,
        },
    )
