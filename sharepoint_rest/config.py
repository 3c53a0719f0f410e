from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Client configuration loaded from environment variables."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    site_url: str = Field(default="", validation_alias="SHAREPOINT_SITE_URL")
    access_token: str = Field(default="", validation_alias="SHAREPOINT_ACCESS_TOKEN")
    request_timeout: float = Field(default=30.0, validation_alias="SHAREPOINT_REQUEST_TIMEOUT")
    user_agent: str = Field(
        default="sharepoint-rest/0.1", validation_alias="SHAREPOINT_USER_AGENT"
    )
    digest_margin_seconds: float = Field(
        default=60.0, validation_alias="SHAREPOINT_DIGEST_MARGIN_SECONDS"
    )

    @field_validator("site_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str:
        if not value:
            return ""
        return str(value).strip().rstrip("/")

    def validate_settings(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []
        if not self.site_url:
            errors.append("SHAREPOINT_SITE_URL is required")
        elif not self.site_url.startswith(("http://", "https://")):
            errors.append("SHAREPOINT_SITE_URL must be an http(s) URL")
        if self.request_timeout <= 0:
            errors.append("SHAREPOINT_REQUEST_TIMEOUT must be positive")
        if self.digest_margin_seconds < 0:
            errors.append("SHAREPOINT_DIGEST_MARGIN_SECONDS cannot be negative")
        return errors


settings = Settings()
