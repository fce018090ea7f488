"""
Configuration settings for the SDLT MCP server
"""

from importlib.metadata import PackageNotFoundError, version

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DISTRIBUTION_NAME = "sdlt-mcp"


def _distribution_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.1.0"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Service
    service_name: str = DISTRIBUTION_NAME
    service_version: str = Field(default_factory=_distribution_version)
    log_level: str = "INFO"

    # MCP
    server_instructions: str = Field(
        default="This server provides a calculator tool to work out UK SDLT.",
        description="Free-text instructions returned to the client in the initialize response",
    )


# Global settings instance
settings = Settings()
