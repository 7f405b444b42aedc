"""Configuration management for bibletracker.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Owner of the ledger the CLI works on
    owner_id: str

    # Plan preview length in days
    plan_days: int

    # Logging
    log_level: str
    log_file: Optional[Path]

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "BIBLETRACKER_DB_PATH",
            str(Path.home() / ".bibletracker" / "readings.db"),
        )
        log_file = os.environ.get("BIBLETRACKER_LOG_FILE")

        return cls(
            db_path=Path(db_path_str).expanduser(),
            owner_id=os.environ.get("BIBLETRACKER_OWNER", "local"),
            plan_days=int(os.environ.get("BIBLETRACKER_PLAN_DAYS", "30")),
            log_level=os.environ.get("BIBLETRACKER_LOG_LEVEL", "WARNING").upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if not self.owner_id.strip():
            errors.append("Owner id cannot be empty")

        if self.plan_days < 1:
            errors.append(f"Plan length must be at least 1 day (got {self.plan_days})")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

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
