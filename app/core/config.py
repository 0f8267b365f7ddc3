"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, OTP provider key, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="voting",
        description="MongoDB database name"
    )

    # 2Factor.in SMS OTP provider
    TWO_FACTOR_API_KEY: Optional[str] = Field(
        default=None,
        description="2Factor.in API key"
    )
    TWO_FACTOR_BASE_URL: str = Field(
        default="https://2factor.in",
        description="2Factor.in API base URL"
    )
    TWO_FACTOR_OTP_TEMPLATE: str = Field(
        default="Fincrypt_Verification",
        description="SMS template name used for AUTOGEN OTPs"
    )
    OTP_PROVIDER_TIMEOUT: float = Field(
        default=10.0,
        description="OTP provider request timeout in seconds"
    )

    # Registration form
    OTP_RESEND_COOLDOWN_SECONDS: int = Field(
        default=30,
        description="Seconds before another OTP may be requested"
    )
    OTP_MAX_SENDS: int = Field(
        default=3,
        description="Maximum OTP sends per registration form"
    )
    BACKEND_URL: str = Field(
        default="http://127.0.0.1:5001",
        description="Backend base URL used by the registration client"
    )

    # Security
    BCRYPT_ROUNDS: int = Field(
        default=10,
        description="bcrypt cost factor for password hashes"
    )

    # Application
    HOST: str = Field(
        default="0.0.0.0",
        description="Listening interface"
    )
    PORT: int = Field(
        default=5001,
        description="Listening port"
    )
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

    @validator("TWO_FACTOR_API_KEY")
    def validate_two_factor_key(cls, v, values):
        """Ensure the OTP provider key is set in production."""
        if values.get("ENVIRONMENT") == "production" and not v:
            raise ValueError("TWO_FACTOR_API_KEY is required in production environment")
        return v

    @validator("BCRYPT_ROUNDS")
    def validate_bcrypt_rounds(cls, v):
        """bcrypt accepts cost factors 4..31."""
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

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


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

    if not settings.TWO_FACTOR_BASE_URL:
        errors.append("TWO_FACTOR_BASE_URL is required")

    if settings.is_production and not settings.TWO_FACTOR_API_KEY:
        errors.append("TWO_FACTOR_API_KEY is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
