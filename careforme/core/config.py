"""Configuration management for the CareForMe admin backend."""
import os
from typing import Optional
from functools import lru_cache
from pydantic import BaseModel, Field, validator
from dotenv import load_dotenv
import pytz

load_dotenv()


class Config(BaseModel):
    """Application configuration with validation."""

    # Flask settings
    debug: bool = Field(default=False)
    testing: bool = Field(default=False)
    port: int = Field(default=5000, ge=1024, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"])

    # Firebase settings
    firebase_credentials_path: Optional[str] = Field(default=None)
    firebase_web_api_key: Optional[str] = Field(default=None)
    firebase_auth_base_url: str = Field(default="https://identitytoolkit.googleapis.com/v1")
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Firestore collections
    doctors_collection: str = Field(default="doctors", min_length=1)
    settings_collection: str = Field(default="admin_settings", min_length=1)

    # Security settings
    enable_rate_limiting: bool = Field(default=True)
    rate_limit_per_minute: int = Field(default=120, ge=1)
    min_password_length: int = Field(default=6, ge=1)

    # Sentry APM settings
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_environment: str = Field(default="production")
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)

    # Reporting settings
    timezone: str = Field(default="UTC")
    top_groups_limit: int = Field(default=5, ge=1, le=50)

    @validator("cors_origins", pre=True)
    def parse_cors_origins(cls, v):
        """Parse comma-separated origins from environment variable."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v or []

    @validator("debug", "testing", "enable_rate_limiting", pre=True)
    def parse_bool(cls, v):
        """Parse boolean values from environment variables."""
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return v

    @validator("firebase_credentials_path")
    def validate_firebase_path(cls, v):
        """Ensure Firebase credentials file exists when one is configured."""
        if v and not os.path.exists(v):
            raise ValueError(f"Firebase credentials file not found: {v}")
        return v or None

    @validator("timezone")
    def validate_timezone(cls, v):
        """Reject timezone names pytz does not know."""
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")
        return v


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance."""
    values = {
        "debug": os.getenv("DEBUG", "false"),
        "testing": os.getenv("TESTING", "false"),
        "port": int(os.getenv("PORT", "5000")),
        "firebase_credentials_path": os.getenv("FIREBASE_CREDENTIALS_PATH"),
        "firebase_web_api_key": os.getenv("FIREBASE_WEB_API_KEY"),
        "enable_rate_limiting": os.getenv("ENABLE_RATE_LIMITING", "true"),
        "rate_limit_per_minute": int(os.getenv("RATE_LIMIT_PER_MINUTE", "120")),
        "min_password_length": int(os.getenv("MIN_PASSWORD_LENGTH", "6")),
        "sentry_dsn": os.getenv("SENTRY_DSN"),
        "sentry_environment": os.getenv("SENTRY_ENVIRONMENT", "production"),
        "sentry_traces_sample_rate": float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
        "timezone": os.getenv("TIMEZONE", "UTC"),
        "top_groups_limit": int(os.getenv("TOP_GROUPS_LIMIT", "5")),
        "request_timeout_seconds": float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10")),
    }

    # Optional overrides keep their model defaults when unset
    for key, env_name in (
        ("firebase_auth_base_url", "FIREBASE_AUTH_BASE_URL"),
        ("doctors_collection", "DOCTORS_COLLECTION"),
        ("settings_collection", "SETTINGS_COLLECTION"),
        ("cors_origins", "CORS_ORIGINS"),
    ):
        if os.getenv(env_name):
            values[key] = os.getenv(env_name)

    return Config(**values)
