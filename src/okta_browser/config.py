"""Configuration management using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

ORG_URL_ENV = "OKTA_ORG_URL"
API_TOKEN_ENV = "OKTA_API_TOKEN"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Okta organization
    okta_org_url: str = Field(
        default="",
        description="Base URL of the Okta organization, e.g. https://example.okta.com",
    )
    okta_api_token: SecretStr = Field(
        default=SecretStr(""),
        description="Okta API token (SSWS)",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=None,
        description="Write logs to this file instead of the Textual console",
    )

    # Network
    fetch_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single directory request",
    )

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with the non-None overrides applied."""
        update = {key: value for key, value in overrides.items() if value is not None}
        if "okta_api_token" in update and not isinstance(update["okta_api_token"], SecretStr):
            update["okta_api_token"] = SecretStr(update["okta_api_token"])
        if not update:
            return self
        return self.model_copy(update=update)


def _invalid_settings(error: ValidationError) -> ConfigError:
    """Describe every rejected environment value by its variable name."""
    names: list[str] = []
    problems: list[str] = []
    for detail in error.errors():
        name = str(detail["loc"][0]).upper() if detail["loc"] else "SETTINGS"
        if name not in names:
            names.append(name)
        problems.append(f"{name}: {detail['msg']}")
    return ConfigError(names, detail=f"Invalid setting(s): {'; '.join(problems)}")


def require_settings(settings: Settings) -> None:
    """Raise ConfigError naming every required setting that is empty."""
    missing = []
    if not settings.okta_org_url.strip():
        missing.append(ORG_URL_ENV)
    if not settings.okta_api_token.get_secret_value().strip():
        missing.append(API_TOKEN_ENV)
    if missing:
        raise ConfigError(missing)


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise _invalid_settings(e) from e
    return _settings
