"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. DATABASE_URL is checked when a session is first
needed; JWT_SECRET is validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except jwt_secret, which
    validate_required checks.
    """

    # App
    app_name: str = "tasktrack"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (Postgres via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Auth: bearer tokens are HS256 JWTs issued by the auth provider.
    jwt_secret: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    # Expected "aud" claim; empty string disables the audience check.
    jwt_audience: str = "authenticated"

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    # SlowAPI limit string for POST / PATCH / DELETE routes, per client address.
    write_rate_limit: str = "120/minute"

    # Task listing
    default_page_size: int = 20
    max_page_size: int = 100

    # Maintenance scripts: team credited with requests that lack a requesting team.
    default_requesting_team_name: str = "IT Team"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and listing bounds."""
        if not self.jwt_secret.get_secret_value():
            raise ValueError(
                "JWT_SECRET is required (the auth provider's JWT signing secret). "
                "Set in environment or .env file."
            )
        if self.default_page_size < 1 or self.max_page_size < self.default_page_size:
            raise ValueError(
                "default_page_size must be >= 1 and <= max_page_size, got "
                f"{self.default_page_size} / {self.max_page_size}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
