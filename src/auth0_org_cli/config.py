"""Environment-driven configuration for the Management API connection.

Values come from ``AUTH0_*`` environment variables, with a ``.env`` file
as fallback.  The resulting :class:`Settings` object is passed explicitly
into the transport; nothing in ``core`` reads the environment.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from auth0_org_cli.exceptions import ConfigurationError

DEFAULT_ENV_FILE = ".env"

_SETUP_HINT = (
    "Run `auth0-org-cli setup` or copy .env.example to .env and set "
    "AUTH0_DOMAIN plus AUTH0_MANAGEMENT_TOKEN (or AUTH0_CLIENT_ID and "
    "AUTH0_CLIENT_SECRET)."
)


def strip_domain(value: str) -> str:
    """Drop any URL scheme and trailing slash from a tenant domain."""
    text = value.strip()
    for scheme in ("https://", "http://"):
        if text.lower().startswith(scheme):
            text = text[len(scheme):]
    return text.rstrip("/")


class Settings(BaseSettings):
    """Connection settings for one Auth0 tenant."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH0_",
        env_file=DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    domain: str = Field(default="", description="Tenant domain, e.g. acme.eu.auth0.com")
    management_token: SecretStr | None = Field(default=None, description="Static Management API bearer token")
    client_id: str | None = Field(default=None, description="Machine-to-machine client id")
    client_secret: SecretStr | None = Field(default=None, description="Machine-to-machine client secret")
    audience: str | None = Field(default=None, description="Token audience; defaults to the Management API")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    @field_validator("domain", mode="before")
    @classmethod
    def _normalize_domain(cls, value: object) -> str:
        text = strip_domain(str(value or ""))
        if text and "." not in text:
            raise ValueError(f"'{text}' is not a valid tenant domain")
        return text

    @field_validator("client_id", "audience", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("management_token", "client_secret", mode="before")
    @classmethod
    def _blank_secret_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"

    @property
    def token_audience(self) -> str:
        return self.audience or f"{self.base_url}/api/v2/"

    @property
    def uses_client_credentials(self) -> bool:
        return self.management_token is None

    @property
    def has_credentials(self) -> bool:
        if self.management_token is not None:
            return True
        return self.client_id is not None and self.client_secret is not None


def load_settings(env_file: str | Path | None = DEFAULT_ENV_FILE) -> Settings:
    """Build :class:`Settings` and verify the connection can be attempted.

    Raises
    ------
    ConfigurationError
        When the domain or both credential forms are missing, or a
        value fails validation.
    """
    try:
        settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid configuration: {problems}",
            hint=_SETUP_HINT,
        ) from exc

    if not settings.domain:
        raise ConfigurationError(
            "AUTH0_DOMAIN is required.",
            hint=_SETUP_HINT,
        )
    if not settings.has_credentials:
        raise ConfigurationError(
            "AUTH0_MANAGEMENT_TOKEN, or AUTH0_CLIENT_ID with AUTH0_CLIENT_SECRET, is required.",
            hint=_SETUP_HINT,
        )
    return settings
