"""
Configuration Management for the Finance Tracker Client

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: The API base URL is resolved ONCE, here, and handed to the
client at construction. Nothing else in the package looks at the environment
to decide where requests go.
"""

from datetime import tzinfo
from functools import cached_property, lru_cache
from typing import Optional

from babel import Locale, UnknownLocaleError
from babel.dates import LOCALTZ, get_timezone
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PRODUCTION_URL = "https://family-growth-tracker-production.up.railway.app"
DEFAULT_DEVELOPMENT_URL = "http://localhost:8080"


class ApiSettings(BaseSettings):
    """Backend API location and transport configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    base_url: Optional[str] = Field(
        default=None,
        description="Explicit API origin. Wins over hostname-based resolution."
    )
    hostname: Optional[str] = Field(
        default=None,
        description="Host the application is served from, if known"
    )
    production_url: str = Field(
        default=DEFAULT_PRODUCTION_URL,
        description="Origin used when served from a non-local host"
    )
    development_url: str = Field(
        default=DEFAULT_DEVELOPMENT_URL,
        description="Origin used locally or when no host is known"
    )
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Transport timeout. None means wait indefinitely."
    )

    @field_validator("base_url", "production_url", "development_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Endpoints are appended as '/api/...', so drop any trailing slash."""
        if v is None:
            return v
        v = v.strip().rstrip("/")
        return v or None

    def resolve_base_url(self) -> str:
        """
        Pick the API origin for this process.

        An explicit base_url always wins. Otherwise a known, non-local host
        means we are deployed and talk to production; anything else is
        local development.
        """
        if self.base_url:
            return self.base_url
        if self.hostname and self.hostname.strip().lower() != "localhost":
            return self.production_url
        return self.development_url


class FormatSettings(BaseSettings):
    """Locale configuration for user-facing text."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_FORMAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    locale: str = Field(
        default="en_US",
        description="Babel locale identifier for dates and currency"
    )
    currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO 4217 currency code for amounts"
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone for rendering timestamps. Defaults to the system zone."
    )

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Reject locales babel does not know about."""
        try:
            Locale.parse(v)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unknown locale: {v}") from e
        return v

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @property
    def tzinfo(self) -> tzinfo:
        """Timezone used to turn timestamps into calendar dates."""
        if self.timezone:
            return get_timezone(self.timezone)
        return LOCALTZ


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON lines (False gives console output)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access. Each group is read from
    the environment on first access and kept for the life of the instance.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @cached_property
    def api(self) -> ApiSettings:
        return ApiSettings()

    @cached_property
    def formatting(self) -> FormatSettings:
        return FormatSettings()

    @cached_property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for each group that failed.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("api", "formatting", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
