"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Database credentials come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - MONGODB_URI, when set, wins over the DB_USER / DB_USER_PASSWORD / DB_HOST parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Credentials are percent-escaped when assembling the URI: passwords may
      contain '@' or ':'
"""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_user: str = ""
    db_user_password: str = ""
    db_host: str = "basicsexploring.cgr22.mongodb.net"
    db_app_name: str = "basicsExploring"
    mongodb_uri: str | None = None
    database_name: str = "trendyBoutique"
    database_timeout_ms: int = 5000

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def database_url(self) -> str:
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:"
            f"{quote_plus(self.db_user_password)}@{self.db_host}/"
            f"?retryWrites=true&w=majority&appName={self.db_app_name}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
