# configcanon/service/config.py

"""Application configuration using Pydantic Settings.

Manages environment variables, defaults, and validation rules.
"""

from pathlib import Path
from typing import List, Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from configcanon.core.definitions import DIGEST_ALGORITHMS


class Settings(BaseSettings):
    """Global application settings.

    Loads values from environment variables (prefix 'CONFIGCANON_') or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFIGCANON_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root logging level.")

    log_format: Literal["json", "text"] = Field(
        default="json", description="Structured JSON or plain text log lines."
    )

    # Input limits
    max_input_bytes: int = Field(
        default=1024 * 1024,
        gt=0,
        description="Largest accepted raw config, in UTF-8 bytes.",
    )

    # Fingerprinting
    digest_algorithms: List[str] = Field(
        default_factory=lambda: list(DIGEST_ALGORITHMS),
        description="Digests computed over canonical text.",
    )

    registry_path: Optional[Path] = Field(
        default=None,
        description="Alternate file-identity table replacing the packaged one.",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("digest_algorithms")
    @classmethod
    def validate_digest_algorithms(cls, v: List[str]) -> List[str]:
        """Ensure every algorithm is supported and the list is not empty."""
        algorithms = [a.strip().lower() for a in v]
        if not algorithms:
            raise ValueError("At least one digest algorithm is required")
        unknown = [a for a in algorithms if a not in DIGEST_ALGORITHMS]
        if unknown:
            raise ValueError(f"Unsupported digest algorithms: {unknown}")
        return algorithms


# Singleton settings instance
settings = Settings()
