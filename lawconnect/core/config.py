"""
Application configuration models and helpers.

Every secret the service needs (Google client credentials, the Supabase
service-role key) is read here and nowhere else; handlers receive the
resulting settings objects through the dependency factories.
"""

from functools import lru_cache
from typing import Annotated, Optional

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _split_csv(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    if isinstance(value, (tuple, list)):
        return tuple(value)
    return tuple(item.strip() for item in value.split(",") if item.strip())


class _Settings(BaseSettings):
    # Nested sections come from default_factory and read .env on their own.
    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


class GoogleSettings(_Settings):
    """Google OAuth client registration."""

    client_id: str = Field(..., validation_alias="GOOGLE_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="GOOGLE_CLIENT_SECRET")
    redirect_uri: Optional[AnyHttpUrl] = Field(
        None,
        validation_alias="GOOGLE_REDIRECT_URI",
        description="Default redirect URI used when building consent URLs.",
    )


class SupabaseSettings(_Settings):
    """Hosted database and identity service."""

    url: AnyHttpUrl = Field(..., validation_alias="SUPABASE_URL")
    service_role_key: str = Field(
        ...,
        validation_alias="SUPABASE_SERVICE_ROLE_KEY",
        description="Privileged key that bypasses row level security.",
    )
    anon_key: Optional[str] = Field(
        None,
        validation_alias="SUPABASE_ANON_KEY",
        description="Public gateway key sent with caller-scoped requests.",
    )
    tokens_table: str = Field(
        "google_calendar_tokens", validation_alias="SUPABASE_TOKENS_TABLE"
    )
    clients_table: str = Field("clientes", validation_alias="SUPABASE_CLIENTS_TABLE")
    reminders_table: str = Field(
        "email_reminders", validation_alias="SUPABASE_REMINDERS_TABLE"
    )

    @property
    def base_url(self) -> str:
        return str(self.url).rstrip("/")

    @property
    def gateway_key(self) -> str:
        return self.anon_key or self.service_role_key


class OAuthSettings(_Settings):
    """OAuth consent configuration."""

    # Mail sending rides on the same grant as the calendar integration.
    scopes: Annotated[tuple[str, ...], NoDecode] = Field(
        (
            "https://www.googleapis.com/auth/calendar",
            "https://www.googleapis.com/auth/gmail.send",
        ),
        validation_alias="OAUTH_SCOPES",
    )

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value):
        """Support providing scopes as a comma-separated string."""
        return _split_csv(value)


class SecuritySettings(_Settings):
    """Security-related configuration."""

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description="Secret used to derive the key that seals stored refresh tokens.",
    )


class AppSettings(_Settings):
    """Root settings object for the FastAPI application."""

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        ("*",), validation_alias="CORS_ALLOW_ORIGINS"
    )
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"prod", "production"}

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        return _split_csv(value)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "OAuthSettings",
    "SecuritySettings",
    "SupabaseSettings",
    "get_settings",
]
