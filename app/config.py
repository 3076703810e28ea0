import logging
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from functools import lru_cache
from typing import Optional, Self

logger = logging.getLogger(__name__)

PROJECT_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    # App settings
    app_name: str = "Service Revenue Estimator"
    debug: bool = False

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Google Maps Geocoding
    google_maps_api_key: str = ""
    geocode_base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    geocode_timeout_seconds: Optional[float] = None  # None = wait for the provider

    # City dataset (static JSON, loaded once per process)
    cities_data_path: Path = PROJECT_DIR / "data" / "us-cities.json"

    # Sentry Error Monitoring
    sentry_dsn: str = ""
    sentry_environment: str = "development"

    @field_validator("geocode_timeout_seconds")
    @classmethod
    def validate_geocode_timeout(cls, v: Optional[float]) -> Optional[float]:
        """Reject non-positive timeouts."""
        if v is not None and v <= 0:
            raise ValueError("GEOCODE_TIMEOUT_SECONDS must be positive")
        return v

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        """Warn about missing configuration at startup."""
        if not self.google_maps_api_key:
            logger.warning(
                "Config: GOOGLE_MAPS_API_KEY not set - census-data requests will fail"
            )

        if self.sentry_dsn:
            logger.info("Config: Enabled features - Sentry")

        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
