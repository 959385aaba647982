"""Configuration management for bookfinder.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .api import DEFAULT_BASE_URL

# Load .env file if present
load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Google Books
    api_key: Optional[str]
    base_url: str

    # HTTP
    timeout: float  # seconds

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            api_key=os.environ.get("GOOGLE_BOOKS_API_KEY") or None,
            base_url=os.environ.get("BOOKFINDER_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.environ.get("BOOKFINDER_TIMEOUT", "10")),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if not self.api_key:
            errors.append("GOOGLE_BOOKS_API_KEY is not set")
        if self.timeout <= 0:
            errors.append(f"BOOKFINDER_TIMEOUT must be positive, got {self.timeout}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
