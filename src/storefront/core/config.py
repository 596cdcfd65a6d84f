# src/storefront/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_name: str = "StorefrontCore"
    app_version: str = "1.0.0"

    # Remote catalog
    catalog_url: str = "https://fakestoreapi.com/products"
    catalog_timeout_seconds: float = Field(default=10.0, gt=0)

    # Search: Ruhephase in Sekunden, bevor ein Suchbegriff als "settled" gilt
    search_debounce_seconds: float = Field(default=0.3, ge=0)
    search_min_length: int = Field(default=3, ge=0)

    # Cart persistence
    cart_persist_debounce_seconds: float = Field(default=0.3, ge=0)
    cart_storage_key: str = "cartProducts"
    storage_url: str = "sqlite:///storefront.db"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
