"""
Load settings from .env. Never log or expose secret values.
All values come from environment variables (populated via .env file).
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_URL_NOT_CONFIGURED = (
    "Project Buddy API base URL is not configured. Provide Session Info → API Base URL "
    "or set the PROJECT_BUDDY_API_BASE_URL environment variable."
)


class ConfigurationError(Exception):
    """Fatal misconfiguration, raised before any request is attempted."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project Buddy, checked in this order
    project_buddy_api_base_url: Optional[str] = Field(default=None, description="Project Buddy API base URL")
    project_buddy_base_url: Optional[str] = Field(default=None, description="Legacy name for the base URL")
    project_api_base_url: Optional[str] = Field(default=None, description="Legacy name for the base URL")

    # Tools
    tools_config_path: Optional[str] = Field(
        default=None, description="JSON file with the tool defaults (NodeConfig)"
    )

    # App
    log_level: str = Field(default="INFO", description="Log level")
    api_host: str = Field(default="0.0.0.0", description="FastAPI bind host")
    api_port: int = Field(default=8000, description="FastAPI port")

    @property
    def base_url_candidates(self) -> list[str]:
        values = [self.project_buddy_api_base_url, self.project_buddy_base_url, self.project_api_base_url]
        return [v.strip() for v in values if isinstance(v, str) and v.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def resolve_base_url(configured: Optional[str], settings: Optional[Settings] = None) -> str:
    """Configured (UI) value first, then the env candidates; trailing slash removed."""
    settings = settings or get_settings()
    candidate = configured.strip() if isinstance(configured, str) else ""
    env_candidates = settings.base_url_candidates
    base_url = candidate or (env_candidates[0] if env_candidates else "")
    if not base_url:
        raise ConfigurationError(BASE_URL_NOT_CONFIGURED)
    return base_url.rstrip("/")
