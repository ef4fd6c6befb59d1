"""
Configuration management for the Mall Customer Segmentation API.

Uses Pydantic Settings for type-safe configuration.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Environment
    environment: str = "development"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # API
    api_prefix: str = "/api"
    api_key: Optional[str] = None
    api_base_url: str = "http://localhost:8000"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173,http://localhost:8501"

    # Dataset
    data_seed: int = 42
    dataset_csv_path: Optional[str] = None

    # Rate limiting
    rate_limit: str = "1000/hour"
    rate_limit_enabled: bool = True

    # Prometheus
    enable_prometheus_metrics: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    auto_reload: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins into list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
