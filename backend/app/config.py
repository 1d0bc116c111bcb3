"""
Configuration settings for the Shop Directory API.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )
    HOST: str = Field(default="0.0.0.0", description="Listening address")
    PORT: int = Field(default=3000, description="Listening port")
    RATE_LIMIT: str = Field(
        default="120/minute", description="Rate limit for mutating endpoints"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        ..., min_length=1, description="Document store connection string"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # File Upload Configuration
    UPLOAD_DIR: str = Field(
        default="./public/uploads", description="Directory for uploaded shop photos"
    )
    UPLOAD_URL_PREFIX: str = Field(
        default="/uploads", description="Public path prefix of uploaded photos"
    )

    # Reverse geocoding (Nominatim)
    GEOCODER_URL: str = Field(
        default="https://nominatim.openstreetmap.org/reverse",
        description="Reverse geocoding endpoint",
    )
    GEOCODER_TIMEOUT: float = Field(
        default=10.0, description="Reverse geocoding timeout in seconds"
    )
    GEOCODER_USER_AGENT: str = Field(
        default="shop-directory-api/1.0",
        description="User-Agent sent to the geocoder (required by Nominatim)",
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance; a missing DATABASE_URL fails here, at startup
settings = Settings()
