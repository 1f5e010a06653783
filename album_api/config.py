"""
Application configuration using Pydantic Settings.
Manages all environment variables and settings.
"""
from enum import Enum
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./album_api.db"
DEFAULT_JWT_SECRET = "jwt-secret-change-in-production"


class Environment(str, Enum):
    """Application environment modes."""
    DEV = "DEV"
    PRODUCTION = "PRODUCTION"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: Environment = Field(
        default=Environment.DEV,
        description="Application environment: DEV or PRODUCTION"
    )

    # Application
    app_name: str = Field(default="Album API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    @model_validator(mode='after')
    def set_debug_from_environment(self):
        """Set debug mode based on environment if not explicitly set via environment variable."""
        import os
        if 'DEBUG' not in os.environ:
            self.debug = self.environment == Environment.DEV
        return self

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEV

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    # Relational store (albums, photos, reviews)
    database_url: str = Field(default=DEFAULT_DATABASE_URL)
    db_pool_size: int = Field(default=10)
    db_max_overflow: int = Field(default=20)
    db_pool_timeout: int = Field(default=30)
    db_pool_recycle: int = Field(default=1800)

    @field_validator("database_url", mode="before")
    @classmethod
    def coerce_empty_database_url(cls, v: str) -> str:
        if not v or not str(v).strip():
            return DEFAULT_DATABASE_URL
        return v

    # Credential store (user documents)
    mongo_url: str = Field(default="mongodb://localhost:27017")
    mongo_db_name: str = Field(default="users")
    mongo_users_collection: str = Field(default="users")
    mongo_timeout_ms: int = Field(default=5000)

    # JWT
    jwt_secret_key: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24)

    # Password hashing cost
    bcrypt_rounds: int = Field(default=8, ge=4, le=31)

    # Pagination
    albums_page_size: int = Field(default=10, gt=0)

    # 로그 파일 디렉터리. 쓰기 권한이 없으면 파일 로깅만 비활성화됨
    log_dir: str = Field(default="/var/log/album-api")

    class Config:
        env_file = None
        case_sensitive = False


def validate_settings(settings: Settings) -> list:
    """
    Return configuration problems that must block a production startup.
    """
    errors = []
    if settings.jwt_secret_key == DEFAULT_JWT_SECRET:
        errors.append("JWT_SECRET_KEY is not set (default secret in use)")
    if "sqlite" in settings.database_url:
        errors.append("DATABASE_URL points at SQLite")
    return errors


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to avoid reading the environment on every request.
    """
    return Settings()
