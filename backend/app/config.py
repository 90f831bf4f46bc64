from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    chat_model: str = Field(
        default="gpt-4o-mini",
        alias="ONELINE_CHAT_MODEL",
        description="OpenAI chat model used by the LLM schedule parser.",
    )
    parser_strategy: Literal["heuristic", "llm", "auto"] = Field(
        default="heuristic",
        alias="ONELINE_PARSER_STRATEGY",
        description="heuristic, llm, or auto (heuristic with LLM fallback when nothing is found).",
    )
    llm_max_chars: int = Field(
        default=100_000,
        alias="ONELINE_LLM_MAX_CHARS",
        description="Schedule text sent to the LLM is truncated to this many characters.",
    )
    max_upload_mb: int = Field(
        default=20,
        alias="ONELINE_MAX_UPLOAD_MB",
        description="Largest accepted PDF upload, in megabytes.",
    )
    log_level: str = Field(default="INFO", alias="ONELINE_LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
