"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "campusnav_user"
    postgres_password: str = "password"
    postgres_db: str = "campusnav_db"

    # Full URL override (e.g. sqlite:///./campusnav.db for local runs and tests)
    database_url: Optional[str] = None

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Registration
    institution_email_suffix: str = "@go.minnstate.edu"

    # Building catalog is public unless this is switched on
    buildings_require_auth: bool = False

    # App
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    debug: bool = False

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        """URL the engine connects to: explicit override first, then Postgres."""
        return self.database_url or self.postgres_url

    @property
    def display_url(self) -> str:
        """sqlalchemy_url with any password replaced by ***, safe to print or log."""
        return make_url(self.sqlalchemy_url).render_as_string(hide_password=True)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
