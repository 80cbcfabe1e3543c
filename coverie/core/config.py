import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_INSTITUTION_NAME = "Chandpur Science and Technology"


class Settings(BaseSettings):
    """Application settings, read from the environment and `.env`."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = Field(default="Coverie")
    institution_name: str = Field(default=DEFAULT_INSTITUTION_NAME)

    database_url: str = Field(default="sqlite:///./coverie.db")

    # generative-text service (OpenAI compatible chat completions)
    groq_api_key: Optional[str] = Field(default=None)
    groq_model: str = Field(default="llama-3.3-70b-versatile")
    llm_base_url: str = Field(default="https://api.groq.com/openai/v1")
    llm_timeout_seconds: float = Field(default=60.0, gt=0)

    # TTF fonts for the exported PDF; needed for names outside Latin-1
    cover_font_path: Optional[str] = Field(default=None)
    cover_bold_font_path: Optional[str] = Field(default=None)

    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
