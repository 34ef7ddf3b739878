from typing import List, Literal
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"
    DEBUG: bool = False

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Launchpad API"
    VERSION: str = "1.0.0"

    # Upstream launch data
    LAUNCH_API_BASE_URL: str = "https://api.spacexdata.com/v2/"
    REQUEST_TIMEOUT: int = 30

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    LAUNCH_CACHE_ENABLED: bool = True
    LAUNCH_CACHE_TTL: int = 300

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "launchpad.log"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["GET", "OPTIONS"]
    CORS_ALLOW_HEADERS: List[str] = ["Content-Type", "Accept", "X-Request-ID"]

    # Client
    CLIENT_API_URL: str = "http://127.0.0.1:8000/api/v1"
    CLIENT_TIMEOUT: float = 10.0

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Environment-specific configurations
        if self.ENVIRONMENT == "development":
            self.DEBUG = True
            self.LOG_LEVEL = "DEBUG"

        elif self.ENVIRONMENT == "testing":
            self.DEBUG = True
            self.LOG_LEVEL = "ERROR"  # Reduce test noise
            self.REDIS_URL = "redis://localhost:6379/1"  # Different Redis DB
            self.LAUNCH_CACHE_ENABLED = False

        elif self.ENVIRONMENT == "production":
            self.DEBUG = False
            self.LOG_LEVEL = "WARNING"

        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
