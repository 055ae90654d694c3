from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal, Sequence

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ... import __version__ as package_version

REPOSITORY_ROOT = Path(__file__).resolve().parents[4]

EnvironmentName = Literal["development", "test", "ci", "production"]
CommaSeparated = Annotated[list[str], NoDecode]


class TaskUpdatePolicy(str, Enum):
    """Who may edit a task that already exists."""

    ANY_AUTHENTICATED = "any_authenticated"
    CREATOR_OR_ASSIGNEE = "creator_or_assignee"


_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "local": "development",
    "test": "test",
    "testing": "test",
    "ci": "ci",
    "production": "production",
    "prod": "production",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "reload": True,
        "db_auto_create": True,
    },
    "test": {
        "log_level": "WARNING",
        "reload": False,
        "db_auto_create": False,
        "seed_on_startup": False,
    },
    "ci": {
        "log_level": "INFO",
        "reload": False,
        "db_auto_create": False,
        "seed_on_startup": False,
    },
    "production": {
        "log_level": "INFO",
        "reload": False,
        "db_echo": False,
        "db_auto_create": False,
        "seed_on_startup": False,
    },
}


class Settings(BaseSettings):
    """Runtime configuration for the DevBoard API."""

    model_config = SettingsConfigDict(
        env_prefix="DEVBOARD_",
        env_file=REPOSITORY_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "DevBoard"
    environment: EnvironmentName = "development"
    api_prefix: str = "/api"
    version: str = package_version
    database_url: str = "sqlite+aiosqlite:///./devboard.db"
    db_echo: bool = False
    db_auto_create: bool = True
    seed_on_startup: bool = False

    cors_allow_origins: CommaSeparated = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: CommaSeparated = Field(default_factory=lambda: ["*"])
    cors_allow_headers: CommaSeparated = Field(default_factory=lambda: ["*"])

    app_host: str = "0.0.0.0"
    app_port: int = 8080
    log_level: str = "INFO"
    reload: bool = True

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    task_update_policy: TaskUpdatePolicy = TaskUpdatePolicy.ANY_AUTHENTICATED

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        normalized = value.strip().lower() if isinstance(value, str) else ""
        return _ENVIRONMENT_ALIASES.get(normalized, "development")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _coerce_comma_separated(cls, value: object) -> list[str]:
        """Allow comma separated strings for CORS configuration."""

        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Sequence):
            return [str(item) for item in value if str(item).strip()]
        return []

    @field_validator("task_update_policy", mode="before")
    @classmethod
    def _normalise_policy(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @field_validator("access_token_expire_minutes", mode="before")
    @classmethod
    def _ensure_positive_expiry(cls, value: object) -> int:
        try:
            minutes = int(value)
        except (TypeError, ValueError):
            return 60 * 24
        return max(minutes, 1)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(self.model_fields_set)
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()


__all__ = ["EnvironmentName", "Settings", "TaskUpdatePolicy", "get_settings"]
