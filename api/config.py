"""
Application configuration using Pydantic Settings.

This module manages all configuration from environment variables.
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Capability Map API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Read-only API over an enterprise capability map workbook"
    API_PREFIX: str = "/api"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False
    RELOAD: bool = False

    # Workbook Configuration
    EXCEL_FILE_PATH: str = "data/capability_map.xlsx"
    APPLICATIONS_SHEET: str = "Applications"
    MATRIX_SHEET: str = "Matrix"
    APP_COLUMN_PATTERN: str = r"^appName\d+$"
    SCORE_COLUMN_SUFFIX: str = "_score"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # Optional: also log to this file
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    def import_options(self) -> Dict[str, Any]:
        """Keyword arguments for CapabilityImportService."""
        return {
            'applications_sheet': self.APPLICATIONS_SHEET,
            'matrix_sheet': self.MATRIX_SHEET,
            'app_column_pattern': self.APP_COLUMN_PATTERN,
            'score_column_suffix': self.SCORE_COLUMN_SUFFIX,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Create global settings instance
settings = get_settings()
