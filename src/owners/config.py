"""
OWNERS Count Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.owners.errors import MissingCredentialError


class OwnersCountConfig(BaseSettings):
    """
    Configuration for the OWNERS counting tool.

    Reads from environment variables with OWNERS_COUNT_ prefix. The GitHub
    token is also read from the conventional GITHUB_TOKEN variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="OWNERS_COUNT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # GitHub API
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("github_token", "owners_count_github_token"),
        description="Personal access token used for user lookups",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single user lookup",
    )

    # Repositories
    canonical_repo: str = Field(
        default="kubernetes/kubernetes",
        description="org/repo whose OWNERS_ALIASES is the fallback alias table",
    )
    registry_path: str = Field(
        default="sigs.yaml",
        description="Path to the group registry file",
    )
    use_https_clone: bool = Field(
        default=False,
        description="Clone over https instead of ssh",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    def require_token(self) -> str:
        """Return the GitHub token, or fail before any work starts."""
        if not self.github_token:
            raise MissingCredentialError()
        return self.github_token


def load_config(**overrides: Any) -> OwnersCountConfig:
    """Load configuration from environment, with explicit values taking precedence."""
    return OwnersCountConfig(**overrides)
