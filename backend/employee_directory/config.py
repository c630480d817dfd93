"""Application settings and configuration helpers."""
from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

load_dotenv()


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///./employee_directory.db", alias="DATABASE_URL"
    )
    # Required: tokens are never signed with a built-in secret.
    secret_key: str = Field(alias="SECRET_KEY")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=4000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    expose_error_traces: bool = Field(default=False, alias="EXPOSE_ERROR_TRACES")
    validate_partial_updates: bool = Field(default=True, alias="VALIDATE_PARTIAL_UPDATES")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("secret_key")
    @classmethod
    def secret_key_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("SECRET_KEY must be set to a non-empty value")
        return value


def load_settings() -> Settings:
    """Build Settings from the current process environment."""

    env = {
        name: os.environ[name]
        for name in (
            "DATABASE_URL",
            "HOST",
            "PORT",
            "LOG_LEVEL",
            "EXPOSE_ERROR_TRACES",
            "VALIDATE_PARTIAL_UPDATES",
        )
        if name in os.environ
    }
    try:
        return Settings(SECRET_KEY=os.getenv("SECRET_KEY", ""), **env)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return load_settings()
