"""Application-wide configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development"
    )
    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    # Gemini connectivity: API key, or Vertex AI project/location when no key is set
    gemini_api_key: str | None = Field(default=None)
    vertex_project_id: str | None = Field(default=None)
    vertex_location: str = Field(default="us-central1")

    model_name: str = Field(default="gemini-3-flash-preview")
    llm_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    system_prompt_path: Path = Field(
        default=Path("review.prompt"),
        description="Optional file overriding the built-in reviewer instruction.",
    )

    output_dir: Path = Field(
        default=Path("./downloads"),
        description="Where the command-line front end saves generated files.",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
