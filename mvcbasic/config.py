"""
mvcbasic — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
Why:   The binder and renderer read a handful of process-wide values
       (character encoding, template directory, view naming convention).
       They are loaded once at startup and never mutated afterwards.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types, and provides a singleton `settings` object.
Who:   Imported by the core (charset, view resolution) and by main.py.
When:  Loaded once at module import time.
"""

import codecs
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development; the examples
    run without any environment at all.
    """

    # ── Request Binding ───────────────────────────────────────────────────
    # What: Charset used to decode request bodies that don't declare one
    # Why utf-8: JSON is utf-8 by definition and browsers post forms as utf-8
    default_charset: str = Field(default="utf-8")

    @field_validator("default_charset")
    @classmethod
    def validate_charset(cls, v: str) -> str:
        """Rejects charsets Python has no codec for."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown charset '{v}'")
        return v

    # ── View Resolution ───────────────────────────────────────────────────
    # What: Directory holding Jinja2 templates (ships inside the package)
    # Logical view "response/hello" → templates/response/hello.html
    template_dir: str = Field(default=str(PACKAGE_DIR / "templates"))
    view_prefix: str = Field(default="")
    view_suffix: str = Field(default=".html")

    # ── Static Resources ──────────────────────────────────────────────────
    # What: Directory served as-is for paths no controller claims
    static_dir: str = Field(default=str(PACKAGE_DIR / "static"))

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:8080")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

    # What: Controls verbosity of logging
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
        "case_sensitive": False,
    }


# Singleton instance, imported throughout the application
settings = Settings()
