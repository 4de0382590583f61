"""Settings for reaching the CMS, loaded with pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cms_jsonapi.utils.urls import site_base_url


class Settings(BaseSettings):
    """Settings loaded from environment variables with the CMS_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="CMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # CMS connection
    api_url: str = "http://localhost:8080/jsonapi"
    base_url: str | None = None
    auth_token: str | None = None
    request_timeout: float = 30.0
    # Raise on failed fetches instead of substituting an empty document
    strict_fetch: bool = False

    # Content
    about_page_nid: int = 11
    services_path: str = "/services"

    # App
    app_name: str = "CMS Content API"
    debug: bool = False
    log_level: str = "INFO"
    default_page_limit: int = 10
    max_page_limit: int = 100

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def site_base_url(self) -> str:
        """Base URL that relative file paths are joined onto."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return site_base_url(self.api_url)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
