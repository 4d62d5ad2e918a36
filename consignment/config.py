from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment or a local .env file."""
    APP_NAME: str = "Consignment Ledger"
    APP_VERSION: str = "1.0.0"

    # Key-value store holding the client registry and the product catalog
    REDIS_URL: str = "redis://localhost:6379/0"
    STORAGE_NAMESPACE: str = "newpet"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
