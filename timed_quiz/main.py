from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from timed_quiz.api.routes.health import router as health_router
from timed_quiz.api.routes.quiz import router as quiz_router
from timed_quiz.core.config import get_settings
from timed_quiz.core.logging import configure_logging
from timed_quiz.game.questions.provider import build_question_provider
from timed_quiz.game.sessions.controller import QuizController


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    app.state.quiz_controller.close()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)

    docs_enabled = settings.enable_openapi_docs
    app = FastAPI(
        title="Timed Quiz API",
        version="0.1.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=_lifespan,
    )
    app.state.quiz_controller = QuizController(
        build_question_provider(settings),
        time_limit_seconds=settings.question_time_limit_seconds,
    )
    app.include_router(health_router)
    app.include_router(quiz_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "timed_quiz.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
