from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class Question:
    """One multiple-choice item; the correct option is always one of the options."""

    text: str
    options: tuple[str, ...]
    correct_option: str
    difficulty: Difficulty

    def __post_init__(self) -> None:
        if len(self.options) < 2:
            raise ValueError("question must have at least two options")
        if len(set(self.options)) != len(self.options):
            raise ValueError("question options must be unique")
        if self.correct_option not in self.options:
            raise ValueError("correct option must be one of the options")
