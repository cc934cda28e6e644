# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for various aspects of the application:
# API configuration (version, project name)
# Database connection details
# Session cookie and lifetime
# Request timeout budget


import json
from datetime import timedelta
from typing import List, Union

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # API configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Forum API"
    VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str = "sqlite:///./forum.db"

    # Sessions
    SESSION_LIFETIME_HOURS: float = 24
    SESSION_COOKIE_NAME: str = "session_id"
    COOKIE_SECURE: bool = False

    # Whole-request budget, also enforced on commit
    REQUEST_TIMEOUT_SECONDS: float = 5.0

    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",     # Local development
        "http://localhost:8080",
    ]

    # Development settings - set these differently in production
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            # Handle JSON string format
            try:
                return json.loads(v)
            except ValueError:
                return []
        return v

    @property
    def session_lifetime(self) -> timedelta:
        return timedelta(hours=self.SESSION_LIFETIME_HOURS)

# Create settings instance
settings = Settings()
