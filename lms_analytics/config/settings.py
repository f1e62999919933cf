# -*- coding: utf-8 -*-
"""
lms_analytics/config/settings.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Application settings built on pydantic-settings.

Values come from environment variables first, then from an optional ``.env``
file at the project root. Inside containers only the environment is used.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (the directory holding pyproject.toml)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENV_PATH = (BASE_DIR / ".env").resolve()


class Settings(BaseSettings):
    """Settings loaded from the environment or the ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=ENV_PATH if ENV_PATH.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str | None = None
    postgres_db: str = "lms"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    sql_echo: bool = False

    # Session tokens
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    auth_cookie_name: str = "auth_session"

    # Application
    environment: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    # CORS
    cors_allow_origins: str = ""
    cors_allow_credentials: bool = True
    frontend_port: int | None = None

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.database_url:
            self.database_url = self._build_database_url()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def get_allowed_origins(self) -> list[str]:
        """Explicit ``cors_allow_origins`` first, then the local frontend."""
        if self.cors_allow_origins:
            return [
                origin.strip()
                for origin in self.cors_allow_origins.split(",")
                if origin.strip()
            ]

        port = self.frontend_port or 3000
        return [
            f"http://localhost:{port}",
            f"http://127.0.0.1:{port}",
        ]

    def _build_database_url(self) -> str:
        """Build the asyncpg URL from the individual postgres_* fields."""
        driver = "postgresql+asyncpg"
        return f"{driver}://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    def get_config_source(self) -> str:
        if ENV_PATH.exists():
            return f".env: {ENV_PATH}"
        return "environment variables only"


settings = Settings()
