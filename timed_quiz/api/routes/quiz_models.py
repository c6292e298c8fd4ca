from __future__ import annotations

from pydantic import BaseModel, Field

from timed_quiz.game.questions.types import Difficulty


class DifficultyRequest(BaseModel):
    difficulty: Difficulty | None = None


class SelectOptionRequest(BaseModel):
    option: str = Field(min_length=1)


class RestartRequest(BaseModel):
    reset_answers: bool = True


class QuestionView(BaseModel):
    text: str
    options: list[str]
    difficulty: Difficulty


class QuizStateResponse(BaseModel):
    phase: str
    difficulty: Difficulty | None = None
    current_index: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    question: QuestionView | None = None
    pending_selection: str | None = None
    time_left: int = Field(ge=0)
    answered: int = Field(ge=0)
    error: str | None = None


class ResultItem(BaseModel):
    index: int = Field(ge=0)
    question: str
    options: list[str]
    correct_option: str
    answer: str | None = None
    skipped: bool
    verdict: str


class QuizResultsResponse(BaseModel):
    difficulty: Difficulty | None = None
    score: int = Field(ge=0)
    total: int = Field(ge=0)
    items: list[ResultItem]
