"""
Sanitary Map AI - Configuration Management
Centralized configuration using pydantic-settings.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.constants import (
    DEFAULT_FALLBACK_LOCATION,
    DEFAULT_MAP_CENTER,
    REPORT_KEY_PREFIX,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    debug: bool = True
    log_level: str = "INFO"

    # Storage
    store_backend: str = "memory"  # memory, file, database
    store_file_path: str = "./reports_store.json"
    database_url: str = "sqlite:///./sanitary_map.db"
    report_key_prefix: str = REPORT_KEY_PREFIX

    # Geolocation fallback (Andhra Pradesh)
    fallback_latitude: float = DEFAULT_FALLBACK_LOCATION[0]
    fallback_longitude: float = DEFAULT_FALLBACK_LOCATION[1]
    use_fallback_location: bool = False

    # Map Settings
    map_center_latitude: float = DEFAULT_MAP_CENTER[0]
    map_center_longitude: float = DEFAULT_MAP_CENTER[1]
    map_zoom: int = 5
    map_focus_zoom: int = 12

    # Lifecycle
    allow_admin_reopen: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
