from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DSN_ENV_VAR = "POSTGRES_DSN"

_LIBPQ_SCHEMES = ("postgres://", "postgresql://")
_DSN_FIELD_NAMES = {"database_url", DSN_ENV_VAR.lower(), "greeter_database_url"}


class ConfigurationError(RuntimeError):
    """Raised when the process environment cannot produce usable settings."""


class Settings(BaseSettings):
    """Runtime configuration for the greeter service, populated once at startup."""

    model_config = SettingsConfigDict(
        env_prefix="GREETER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "Birthday Greeter"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("GREETER_ENVIRONMENT", "GREETER_ENV", "environment"),
        description="Deployment environment label.",
    )
    version: str = Field(default="0.1.0", description="API version for metadata and OpenAPI.")
    log_level: str = Field(default="info")

    database_url: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices(DSN_ENV_VAR, "GREETER_DATABASE_URL", "database_url"),
        description="PostgreSQL connection string (libpq URL or SQLAlchemy URL).",
    )

    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP listener.")
    port: int = Field(default=8080, ge=1, le=65535, description="Bind port for the HTTP listener.")

    @property
    def environment_lower(self) -> str:
        return self.environment.lower()

    @property
    def async_database_url(self) -> str:
        """The connection string rewritten to name the asyncpg driver when it is a plain libpq URL."""
        for scheme in _LIBPQ_SCHEMES:
            if self.database_url.startswith(scheme):
                return "postgresql+asyncpg://" + self.database_url[len(scheme):]
        return self.database_url


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env", override=False)
    try:
        return Settings()
    except ValidationError as exc:
        if any(error["loc"] and str(error["loc"][0]).lower() in _DSN_FIELD_NAMES for error in exc.errors()):
            raise ConfigurationError(f"environment variable {DSN_ENV_VAR} is not set") from exc
        raise ConfigurationError(str(exc)) from exc


__all__ = ["ConfigurationError", "DSN_ENV_VAR", "Settings", "get_settings"]
