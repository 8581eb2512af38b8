"""Library configuration management."""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass
class Settings:
    """Settings loaded from environment.

    Rendering output never depends on these values; they only control
    diagnostics.
    """

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    # Diagnostics
    debug: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.log_format not in ("json", "text"):
            raise ValueError(f"LOG_FORMAT must be 'json' or 'text', got {self.log_format!r}")
        self.log_level = self.log_level.upper()


def load_settings_from_env() -> Settings:
    """Load settings from environment variables (and a .env file if present)."""
    load_dotenv()

    def get_bool(key: str, default: bool = False) -> bool:
        value = os.getenv(key, str(default)).lower()
        return value in ("true", "1", "yes")

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "text").lower(),
        debug=get_bool("PROMPTWEAVE_DEBUG", False),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings_from_env()
