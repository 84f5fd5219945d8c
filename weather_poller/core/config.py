from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_poller.schemas.weather import Coordinates


# Shibuya, Tokyo, Japan
DEFAULT_LATITUDE = 35.6620
DEFAULT_LONGITUDE = 139.7038


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WEATHER_POLLER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    # Provider API keys
    owm_api_key: str = Field(default="")
    darksky_api_key: str = Field(default="")

    owm_base_url: str = Field(default="https://api.openweathermap.org/data/2.5")
    darksky_base_url: str = Field(default="https://api.darksky.net")

    # Providers to poll, by registered source id
    sources: list[str] = Field(default_factory=lambda: ["openweathermap", "darksky"])

    # Target location
    latitude: float = Field(default=DEFAULT_LATITUDE, ge=-90.0, le=90.0)
    longitude: float = Field(default=DEFAULT_LONGITUDE, ge=-180.0, le=180.0)

    # OpenWeatherMap free tier refreshes its data every 2 hours or less.
    owm_poll_interval_seconds: float = Field(default=15.0, gt=0.0)
    # Dark Sky free tier allows 1000 calls per day.
    darksky_poll_interval_seconds: float = Field(default=90.0, gt=0.0)

    http_timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)

    # Cloud Monitoring rejects points written more often than once a minute.
    report_interval_seconds: float = Field(default=60.0, ge=60.0)
    google_cloud_project: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_CLOUD_PROJECT", "WEATHER_POLLER_GOOGLE_CLOUD_PROJECT"),
    )
    metric_prefix: str = Field(default="custom.googleapis.com")
    resource_location: str = Field(default="asia-northeast1-a")
    resource_namespace: str = Field(default="ymotongpoo")
    resource_node_id: str = Field(default="public-data")
    monitoring_source_label: str = Field(default="weather-api")

    log_level: str = Field(default="INFO")

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
