from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_openapi_docs: bool = Field(default=True, alias="ENABLE_OPENAPI_DOCS")

    question_api_url: str = Field(default="https://opentdb.com/api.php", alias="QUESTION_API_URL")
    question_api_amount: int = Field(default=10, ge=1, le=50, alias="QUESTION_API_AMOUNT")
    question_api_timeout_seconds: float = Field(default=5.0, gt=0, alias="QUESTION_API_TIMEOUT_SECONDS")
    local_questions_path: str | None = Field(default=None, alias="LOCAL_QUESTIONS_PATH")

    question_time_limit_seconds: int = Field(default=30, ge=1, alias="QUESTION_TIME_LIMIT_SECONDS")
    default_difficulty: Literal["easy", "medium", "hard"] = Field(default="easy", alias="DEFAULT_DIFFICULTY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
