"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - jwt_issuer resolves to None when neither JWT_ISSUER nor SUPABASE_PROJECT_REF is set

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - database_pool_size=0 selects NullPool: one connection per request, closed on exit
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://wildwatch:wildwatch@db:5432/wildwatch"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgres:// URLs; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for prefix in ("postgres://", "postgresql://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 0
    database_max_overflow: int = 0

    # Auth (Supabase-issued HS256 tokens)
    supabase_jwt_secret: str | None = None
    supabase_project_ref: str | None = None
    jwt_issuer_override: str | None = None
    jwt_audience: str = "authenticated"
    jwt_algorithms: list[str] = ["HS256"]
    jwt_leeway_seconds: int = 0

    # Object storage (uploaded images)
    object_store_root: str | None = None

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def jwt_issuer(self) -> str | None:
        if self.jwt_issuer_override:
            return self.jwt_issuer_override
        if self.supabase_project_ref:
            return f"https://{self.supabase_project_ref}.supabase.co/auth/v1"
        return None


@lru_cache
def get_settings() -> Settings:
    return Settings()
