"""Application configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "village_health"

    # Application
    APP_NAME: str = "Village Health Watch"
    API_V1_PREFIX: str = "/api/v1"
    PORT: int = 8000

    # CORS
    BACKEND_CORS_ORIGINS: str = '["http://localhost:3000"]'

    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Invite codes for self-service elevation (empty string disables the role)
    ASHA_INVITE_CODE: str = "ASHA2025"
    ADMIN_INVITE_CODE: str = "ADMIN2025"

    # Route gate
    ADMIN_ROUTE_PREFIXES: List[str] = ["/api/v1/admin"]
    ASHA_ROUTE_PREFIXES: List[str] = ["/api/v1/asha"]
    UNAUTHORIZED_REDIRECT_URL: Optional[str] = None  # e.g. "/unauthorized"; None answers 403 JSON

    # Report ownership denials on records as 404 instead of 403
    HIDE_FOREIGN_RECORDS: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from JSON string."""
        try:
            return json.loads(self.BACKEND_CORS_ORIGINS)
        except ValueError:
            return ["http://localhost:3000"]


settings = Settings()
