from __future__ import annotations

import asyncio
import math
from typing import Callable

import structlog

logger = structlog.get_logger("timed_quiz.game.sessions.timer")


class QuestionTimer:
    """Single countdown on the running event loop.

    ``on_expire`` fires at most once per ``start``. Starting again or calling
    ``stop`` cancels the pending expiry before anything else happens, so an
    old countdown can never call back into a newer question.
    """

    def __init__(self) -> None:
        self._handle: asyncio.TimerHandle | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._deadline: float | None = None
        self._duration: float = 0.0

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    @property
    def duration_seconds(self) -> float:
        return self._duration

    @property
    def remaining_seconds(self) -> int:
        if self._loop is None or self._deadline is None:
            return 0
        return max(0, math.ceil(self._deadline - self._loop.time()))

    def start(self, duration_seconds: float, on_expire: Callable[[], None]) -> None:
        if duration_seconds <= 0:
            raise ValueError("timer duration must be positive")
        self.stop()

        loop = asyncio.get_running_loop()
        self._loop = loop
        self._duration = duration_seconds
        self._deadline = loop.time() + duration_seconds

        def _fire() -> None:
            if self._handle is not handle:
                return
            self._handle = None
            self._deadline = loop.time()
            logger.debug("question_timer_expired", duration_seconds=duration_seconds)
            on_expire()

        handle = loop.call_later(duration_seconds, _fire)
        self._handle = handle

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._deadline = None
