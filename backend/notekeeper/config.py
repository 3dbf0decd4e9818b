"""
NoteKeeper Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py; tests build their own Settings instances and
       hand them to create_app().
When:  Loaded once at module import time.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: The single JSON file mirroring the in-memory note map.
    # Relative paths resolve against the process working directory.
    notes_storage_path: str = Field(
        default="./data/notes.json",
        description="Path of the JSON file holding every note",
    )

    # ── Fault Injection ───────────────────────────────────────────────────
    # What: Probability that PATCH /notes/{id} fails on purpose with a 500.
    # 0.0 disables the injector, 1.0 fails every update.
    update_failure_rate: float = Field(default=0.4, ge=0.0, le=1.0)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (see cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # NOTES_STORAGE_PATH and notes_storage_path both work
    }


# Singleton instance used when create_app() gets no override
settings = Settings()
