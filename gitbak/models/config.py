"""
Pydantic model for application configuration.
Provides validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, field_validator

DEFAULT_MANIFEST_PATH = "backups.json"
DEFAULT_BACKUPS_DIR = "backups"


class GitbakConfig(BaseModel):
    """A validated configuration model for the application."""

    # Locations
    manifest_path: Path = Path(DEFAULT_MANIFEST_PATH)
    backups_dir: Path = Path(DEFAULT_BACKUPS_DIR)

    # Download Settings
    max_workers: int = 4
    timeout: float = 60.0
    max_attempts: int = 3

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 32:
            raise ValueError("Max workers must be between 1 and 32.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be a positive number of seconds.")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1 or v > 10:
            raise ValueError("Max attempts must be between 1 and 10.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that may appear in the INI file."""
        return set(cls.model_fields)
