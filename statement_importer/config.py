"""
Configuration settings for the Statement Importer.
Centralized configuration management for the application.
"""

import os
from pathlib import Path
from typing import Optional


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Statement Transaction Importer"
    VERSION = "1.0.0"

    # File Upload Settings
    MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
    MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
    DEFAULT_SOURCE_NAME: str = os.getenv("DEFAULT_SOURCE_NAME", "uploaded-file")

    # Extraction Settings
    SHEET_INDEX: int = int(os.getenv("SHEET_INDEX", "0"))
    STRICT_MODE: bool = os.getenv("STRICT_MODE", "false").lower() == "true"

    # Summary Settings
    PREVIEW_ROWS: int = int(os.getenv("PREVIEW_ROWS", "5"))

    # Logging Settings
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def validate_file(cls, filename: str, file_size: Optional[int]) -> tuple[bool, Optional[str]]:
        """
        Validate an uploaded file before import.

        File type is not checked here; format detection owns that decision.

        Returns:
            tuple: (is_valid, error_message)
        """
        if file_size is None:
            return True, None

        # Check file size
        if file_size > cls.MAX_FILE_SIZE_BYTES:
            size_mb = file_size / (1024 * 1024)
            return False, f"File too large ({size_mb:.2f} MB). Maximum: {cls.MAX_FILE_SIZE_MB} MB"

        # Check if empty
        if file_size == 0:
            return False, f"File is empty: {filename}"

        return True, None

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "max_file_size_mb": cls.MAX_FILE_SIZE_MB,
            "default_source_name": cls.DEFAULT_SOURCE_NAME,
            "sheet_index": cls.SHEET_INDEX,
            "strict_mode": cls.STRICT_MODE,
            "preview_rows": cls.PREVIEW_ROWS,
            "log_dir": str(cls.LOG_DIR),
            "log_level": cls.LOG_LEVEL,
        }


# Create a singleton instance
config = Config()
