"""
Configuration: default messages and log level, loaded from environment/.env.

Uses pydantic-settings so the messages attached to factory-built results
can be localized without touching code:

  - Environment variables (ROP_ prefix) take priority
  - Fall back to a .env file in the working directory
  - Validate types at load time

Architecture: only RopSettings is a BaseSettings instance. MessageSettings is
a plain BaseModel populated via env_nested_delimiter="__", so the env var
ROP_MESSAGES__NOT_FOUND maps to messages.not_found.

Factories read get_settings() at call time. The settings object is cached;
call get_settings.cache_clear() after changing the environment.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MessageSettings(BaseModel):
    """Default messages used when a factory is called without one."""

    success: str = Field(default="OK", description="Untyped success message")
    typed_success: str = Field(default="Ok", description="Typed success message")
    bad_request: str = Field(
        default="One or more validation errors occurred",
        description="BadRequest default message",
    )
    not_found: str = Field(
        default="The requested resource was not found",
        description="NotFound default message",
    )
    unauthorized: str = Field(
        default="You are not authorized to access the requested resource",
        description="Unauthorized default message",
    )
    conflict: str = Field(
        default="Your request cannot be processed",
        description="Conflict default message",
    )


class RopSettings(BaseSettings):
    """
    Root settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ROP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    messages: MessageSettings = Field(default_factory=lambda: MessageSettings())
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> RopSettings:
    """Return the process-wide settings, loading them on first use."""
    return RopSettings()
