"""Centralized configuration management for the Discord MCP system.

This module provides a single source of truth for all configuration
including the Discord credential, the default guild, timeouts and the
logging and metrics switches.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralized settings for the Discord MCP system."""

    # === Discord Configuration ===
    discord_token: str | None = Field(default=None, description="Discord bot token")
    discord_guild_id: str | None = Field(
        default=None, description="Default Discord server (guild) ID used when a tool omits guild_id"
    )

    # === Timeout Configuration ===
    connect_timeout: float = Field(
        default=60.0, description="Seconds to wait for the Discord gateway to report ready"
    )

    # === HTTP SSE Server Configuration ===
    sse_host: str = Field(default="localhost", description="SSE server host")
    sse_port: int = Field(default=3001, description="SSE server port")

    # === Logging Configuration ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Performance Configuration ===
    enable_metrics: bool = Field(default=True, description="Enable metrics collection")

    # === Test Environment Detection ===
    pytest_current_test: str | None = Field(default=None, description="Test mode indicator")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific adjustments."""
        super().__init__(**kwargs)
        self._adjust_for_test_environment()

    def _adjust_for_test_environment(self):
        """Adjust settings for test environment."""
        if self.is_test_environment:
            # Use shorter timeouts in test environments
            self.connect_timeout = min(self.connect_timeout, 5.0)
            self.enable_metrics = False

    @field_validator("discord_token", "discord_guild_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def is_test_environment(self) -> bool:
        """Check if running in test environment."""
        return "PYTEST_CURRENT_TEST" in os.environ or self.pytest_current_test is not None

    @property
    def token_configured(self) -> bool:
        """Check if a Discord bot token is configured."""
        return bool(self.discord_token)

    @property
    def default_scope(self) -> str:
        """Get the default guild ID, or an empty string when none is configured."""
        return self.discord_guild_id or ""


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        load_dotenv()  # Load .env file
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (primarily for testing)."""
    global _settings
    _settings = None
