"""Configuration settings models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class GitHubSettings(BaseModel):
    """GitHub API client configuration."""

    base_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    token: str | None = Field(
        default=None,
        description="Personal access token (scope: repo, gist, admin:org)",
    )
    api_version: str = Field(
        default="2022-11-28",
        description="Value of the X-GitHub-Api-Version header",
    )
    user_agent: str = Field(
        default="octomate",
        description="User-Agent header sent with every request",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    retry_count: int = Field(
        default=3,
        ge=0,
        description="Number of retries on transport errors and 5xx responses",
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Base delay between retries in seconds",
    )


class BatchSettings(BaseModel):
    """Batch execution configuration."""

    max_concurrent: int = Field(
        default=1,
        ge=1,
        description="Maximum repositories processed concurrently (1 = sequential)",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    file: str | None = Field(
        default=None,
        description="Log file path",
    )
    rotation: str = Field(
        default="10 MB",
        description="Log rotation size",
    )
    retention: str = Field(
        default="7 days",
        description="Log retention period",
    )
    compression: bool = Field(
        default=True,
        description="Whether to compress old logs",
    )
    console_format: str = Field(
        default="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        description="Console log format",
    )


class Settings(BaseModel):
    """Main configuration settings."""

    version: str = Field(
        default="1.0",
        description="Configuration version",
    )
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    batch: BatchSettings = Field(default_factory=BatchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate configuration version."""
        supported_versions = ["1.0"]
        if v not in supported_versions:
            raise ValueError(f"Unsupported config version: {v}. Supported: {supported_versions}")
        return v
