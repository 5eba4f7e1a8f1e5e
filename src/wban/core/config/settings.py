"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """WBAN vitals simulator configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; the simulator has no auth layer.
    wban_host: str = "127.0.0.1"
    wban_port: int = 8001
    wban_log_level: str = "info"
    # Binding to a non-loopback host is refused unless this is set true.
    wban_allow_insecure_bind: bool = False

    # Simulation
    # When set, every patient stream is reproducible (seed mixed with patient id).
    wban_random_seed: int | None = None
    wban_temperature_unit: Literal["fahrenheit", "celsius"] = "fahrenheit"
    # Informational label only; no encryption is performed.
    wban_encryption_label: Literal["AES-256", "AES-128", "none"] = "AES-256"
    # Live patient sessions; the least recently polled is evicted beyond this.
    wban_max_patients: int = Field(default=256, ge=1)


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
