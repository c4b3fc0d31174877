"""
Application Configuration
Loads settings from environment variables
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file"""

    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "ClubHub"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./clubhub.db"

    # JWT
    JWT_SECRET_KEY: str = "temp-jwt-secret-change-later"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24 * 7

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Eligibility rules
    APPLICATION_STATUS_POLICY: str = "permissive"  # 'permissive' or 'forward_only'
    ALLOW_REREGISTRATION_AFTER_CANCEL: bool = False
    DEFAULT_RECRUITMENT_WINDOW_DAYS: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
