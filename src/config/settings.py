"""
Application Configuration Settings
"""

from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Expense Policy Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str
    DATABASE_ECHO: bool = False

    # JWT (tokens are issued by the identity provider, verified here)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Expenses
    DESCRIPTION_MAX_LENGTH: int = 500
    CATEGORY_NAME_MAX_LENGTH: int = 100
    CURRENCY_SYMBOL: str = "$"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8000"  # Comma-separated string

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert comma-separated string to list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    @property
    def log_directory(self) -> str:
        """Directory holding the rotating log files"""
        return os.path.dirname(self.LOG_FILE) or "logs"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()


# Ensure log directory exists
os.makedirs(settings.log_directory, exist_ok=True)
