# backend/yieldcast/config.py
from functools import lru_cache
from typing import List, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

CsvNumericPolicy = Literal["passthrough", "skip_row", "reject_file"]


class Settings(BaseSettings):
    # environment: "dev" for running the app locally, "test" for pytest
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Origins allowed to call the API from a browser (Streamlit dev server, Vite)
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:8501",
            "http://127.0.0.1:8501",
            "http://localhost:5173",
        ]
    )

    # --- OpenAI ---
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_BASE_URL: str | None = None

    # --- DeepSeek (OpenAI-compatible endpoint) ---
    DEEPSEEK_API_KEY: str | None = None
    DEEPSEEK_MODEL: str = "deepseek-chat"
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com"

    # --- Anthropic ---
    ANTHROPIC_API_KEY: str | None = None
    ANTHROPIC_MODEL: str = "claude-3-sonnet-20240229"
    ANTHROPIC_MAX_TOKENS: int = 150

    # --- Llama API (OpenAI-compatible, function calling) ---
    LLAMA_API_KEY: str | None = None
    LLAMA_MODEL: str = "llama3.1-70b"
    LLAMA_BASE_URL: str = "https://api.llama-api.com"

    # None keeps each SDK's own default timeout.
    LLM_TIMEOUT_SECONDS: float | None = Field(None, gt=0)

    # What to do with CSV cells that are not numbers.
    CSV_NUMERIC_POLICY: CsvNumericPolicy = "passthrough"

    # --- UI ---
    API_BASE_URL: str = "http://localhost:8000"

    @model_validator(mode="after")
    def _normalize(self):
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        self.API_BASE_URL = self.API_BASE_URL.rstrip("/")
        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
