from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # API Settings
    PROJECT_NAME: str = "Split Ledger API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Append-only shared expense ledger with net balances"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Storage: "memory" or "mongo"
    STORAGE_BACKEND: str = "memory"

    # MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "split_ledger"

    # Caller identity, supplied by the upstream identity layer
    CALLER_IDENTITY_HEADER: str = "X-Caller-Identity"

    # Balances
    BALANCE_CACHE_ENABLED: bool = False
    BALANCE_CACHE_MAX_ENTRIES: int = 10_000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
