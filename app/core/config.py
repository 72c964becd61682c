"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, token secret, cookie options)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="newDB",
        description="MongoDB database name"
    )
    USERS_COLLECTION: str = Field(
        default="User",
        description="Collection holding user accounts"
    )
    MONGODB_MAX_POOL_SIZE: int = Field(default=50, description="Motor connection pool size")
    MONGODB_TIMEOUT_MS: int = Field(
        default=5000,
        description="Server selection timeout in milliseconds"
    )
    MONGODB_CONNECT_RETRIES: int = Field(
        default=3,
        description="Connection attempts made at startup before giving up"
    )

    # Server
    HOST: str = Field(default="0.0.0.0", description="Listen address")
    PORT: int = Field(default=5000, description="Listen port")

    # Session tokens
    JWT_SECRET_KEY: str = Field(
        default="change-me-in-production-session-secret",
        description="HMAC secret used to sign session tokens"
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="Session token algorithm")
    TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        description="Lifetime of an issued session token in minutes"
    )
    COOKIE_NAME: str = Field(default="token", description="Session cookie name")
    COOKIE_SECURE: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS"
    )

    # Passwords
    BCRYPT_ROUNDS: int = Field(
        default=12,
        description="bcrypt cost factor for password hashing"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Ensure the token secret is changed in production."""
        if info.data.get("ENVIRONMENT") == "production" and v.startswith("change-me"):
            raise ValueError("JWT_SECRET_KEY must be changed in production environment")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def token_max_age_seconds(self) -> int:
        return self.TOKEN_EXPIRE_MINUTES * 60


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if settings.TOKEN_EXPIRE_MINUTES <= 0:
        errors.append("TOKEN_EXPIRE_MINUTES must be positive")

    # Production-specific validations
    if settings.is_production and not settings.COOKIE_SECURE:
        errors.append("COOKIE_SECURE must be enabled in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
