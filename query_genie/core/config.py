"""Application configuration loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=True)


@dataclass(frozen=True)
class Settings:
    """Application settings."""
    # Chat-completion endpoint
    openai_base_url: str
    openai_model: str
    request_timeout: int

    # Persisted key/schema slots
    state_path: str

    # HTTP surface
    cors_origins: tuple[str, ...]
    log_level: str

    @property
    def chat_completions_url(self) -> str:
        return f"{self.openai_base_url}/chat/completions"


def get_settings() -> Settings:
    """Load settings from environment variables."""
    default_state = os.path.join(os.path.expanduser("~"), ".query_genie", "state.json")
    origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    return Settings(
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        request_timeout=int(os.getenv("REQUEST_TIMEOUT", "90")),
        state_path=os.getenv("QUERY_GENIE_STATE_PATH", default_state),
        cors_origins=tuple(origin.strip() for origin in origins.split(",") if origin.strip()),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


# Singleton for caching settings
_settings_cache: Optional[Settings] = None


def get_cached_settings() -> Settings:
    """Get cached settings (loads once)."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = get_settings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    global _settings_cache
    _settings_cache = None
