"""Application configuration loaded from environment variables."""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Google AI. The process starts without a key; chat calls fail instead.
    api_key: Optional[str] = Field(None, env="API_KEY")
    gemini_model: str = Field("gemini-pro", env="GEMINI_MODEL")
    upstream_timeout_seconds: float = Field(60.0, env="UPSTREAM_TIMEOUT_SECONDS")

    # HTTP
    port: int = Field(3000, env="PORT")
    allowed_origins: str = Field("*", env="ALLOWED_ORIGINS")

    # Uploads
    upload_dir: str = Field("uploads", env="UPLOAD_DIR")
    max_upload_bytes: int = Field(10 * 1024 * 1024, env="MAX_UPLOAD_BYTES")

    # Conversation state
    max_history_turns: int = Field(200, env="MAX_HISTORY_TURNS")
    session_ttl_seconds: int = Field(86_400, env="SESSION_TTL_SECONDS")
    session_max_count: int = Field(1_000, env="SESSION_MAX_COUNT")

    # App
    app_env: str = Field("development", env="APP_ENV")
    log_level: str = Field("INFO", env="LOG_LEVEL")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
