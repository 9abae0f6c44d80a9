from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    # Pydantic Settings will automatically look for these as environment variables
    # or in a .env file

    # Database Settings
    # DATABASE_URL wins over the POSTGRES_* parts when set (e.g. "sqlite://" in tests)
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "mentor_connect_db"

    # SQLAlchemy Connection Pooling Settings (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30 # seconds
    DB_POOL_RECYCLE: int = 1800 # seconds (30 minutes)

    # Auth Settings
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30 # 30 days
    BCRYPT_ROUNDS: int = 10

    # HTTP Settings
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:5001"]

    # Profile / Discovery Settings
    BIO_MAX_LENGTH: int = 500
    DISCOVERY_RESULT_LIMIT: int = 50
    DISCOVERY_EXCLUDE_DECLINED: bool = True # False: only pending/accepted hide a user

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore" # Ignore extra env variables not defined here
    )

@lru_cache() # Cache settings to avoid re-reading on every call
def get_settings():
    """Returns a cached instance of the Settings."""
    return Settings()
