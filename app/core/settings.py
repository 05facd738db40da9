"""
Core settings and environment variables for the Safety Report Intake service.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Safety Report Intake"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - comma-separated origins. "*" is permissive; restrict before production.
    CORS_ORIGINS: str = "*"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON
    FIREBASE_STORAGE_BUCKET: Optional[str] = None

    # Reports and locations live in separate collections for privacy isolation
    REPORTS_COLLECTION: str = "reports"
    LOCATIONS_COLLECTION: str = "report_locations"

    # Used when a media payload carries no data URI prefix
    MEDIA_DEFAULT_CONTENT_TYPE: str = "image/jpeg"

    # In-memory stores for local development without Firebase credentials
    USE_MOCK_DB: bool = False

    # Include the raw exception message in 500 responses
    EXPOSE_ERROR_DETAILS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
