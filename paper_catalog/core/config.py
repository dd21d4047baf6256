"""Catalog client settings and configuration."""

from typing import Literal

from pydantic import Field, field_validator, model_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore


class Settings(BaseSettings):
    """Catalog client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Paper Catalog Admin")

    # Papers API
    API_BASE_URL: str = Field(default="http://localhost:5000/api")
    PAPERS_LIST_PATH: str = Field(default="papers/admin/list")
    PAPERS_METADATA_PATH: str = Field(default="papers/metadata")
    API_TOKEN: str | None = Field(default=None)  # Bearer token for the admin session

    # Pagination
    PAGE_SIZE: int = Field(default=8)
    MAX_PAGE_SIZE: int = Field(default=100)

    # Transport
    REQUEST_TIMEOUT_SECONDS: float = Field(default=10.0)

    # Results controller policy
    CANCEL_SUPERSEDED_REQUESTS: bool = Field(default=True)
    KEEP_RESULTS_ON_ERROR: bool = Field(default=True)  # False clears items/total on error

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so paths can be joined with a single '/'."""
        return value.strip().rstrip("/")

    @field_validator("PAPERS_LIST_PATH", "PAPERS_METADATA_PATH")
    @classmethod
    def strip_path_slashes(cls, value: str) -> str:
        return value.strip().strip("/")

    @field_validator("REQUEST_TIMEOUT_SECONDS")
    @classmethod
    def positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")
        return value

    @model_validator(mode="after")
    def check_page_size(self) -> "Settings":
        """Validate page size bounds and production requirements."""
        if self.PAGE_SIZE < 1 or self.PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError(f"PAGE_SIZE must be between 1 and {self.MAX_PAGE_SIZE}")
        # Fail fast in production if the admin token is missing
        if self.ENV == "prod" and not self.API_TOKEN:
            raise ValueError("API_TOKEN must be set in production")
        return self


# Global settings instance
settings = Settings()
