"""Central configuration object (env‑driven).

Uses Pydantic *BaseSettings* so everything can be overridden via environment
variables or a local *.env* file.  Services read ``settings.<FIELD>`` at call
time, never at import, so tests can override individual values.
"""
from __future__ import annotations

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Load settings from env vars or .env."""

    USER_STORE_FILE: str = Field(
        default="data/users.yaml",
        description="Path to YAML file backing the user store",
    )

    MAIL_OUTBOX_FILE: str = Field(
        default="data/outbox.jsonl",
        description="JSON‑lines file receiving outbound mail records",
    )

    JWT_SECRET: str = Field(
        default="dev-secret-change-me",
        description="HS256 secret for access tokens (replace in prod!)",
    )

    JWT_REFRESH_SECRET: str = Field(
        default="dev-refresh-secret-change-me",
        description="HS256 secret for refresh tokens (replace in prod!)",
    )

    ACCESS_TOKEN_TTL_SEC: int = Field(default=900, ge=1)
    REFRESH_TOKEN_TTL_SEC: int = Field(default=7 * 24 * 3600, ge=1)

    LOG_LEVEL: str = Field(default="INFO", description="Console sink level")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# singleton instance ---------------------------------------------------------

settings = Settings()

