"""Application configuration loaded from environment variables and .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Item catalog (JSON array of item records)
    ITEM_CATALOG_PATH: str = "src/data/item_catalog.json"

    # Variable store backend: "sql" | "memory"
    VARIABLE_STORE: str = "sql"

    # Variable names shared with the host game
    STORAGE_VARIABLE: str = "item_storage"
    GROUND_VARIABLE: str = "items"


settings = Settings()
