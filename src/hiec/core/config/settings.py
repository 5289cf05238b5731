"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Health insight server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; the server has no auth layer.
    hiec_host: str = "127.0.0.1"
    hiec_port: int = 8003
    hiec_log_level: str = "info"
    hiec_allow_insecure_bind: bool = False

    # Analysis
    default_period: Literal["week", "month", "quarter"] = "month"
    environment_history_days: int = 30

    # Profile collaborator (mock)
    profile_post_menopausal: bool = False


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
