"""Configuration management for quotebook.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_HOME = Path.home() / ".quotebook"


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Export
    export_path: Path

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path = Path(
            os.environ.get("QUOTEBOOK_DB_PATH", str(DEFAULT_HOME / "quotes.json"))
        ).expanduser()
        export_path = Path(
            os.environ.get(
                "QUOTEBOOK_EXPORT_PATH", str(DEFAULT_HOME / "quotes_export.csv")
            )
        ).expanduser()

        return cls(
            db_path=db_path,
            export_path=export_path,
            log_level=os.environ.get("QUOTEBOOK_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        # Check database directory is writable
        if not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.db_path.exists() and self.db_path.is_dir():
            errors.append(f"Database path is a directory: {self.db_path}")

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
