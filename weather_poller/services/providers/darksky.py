from __future__ import annotations

import httpx

from weather_poller.schemas.darksky import DarkSkyForecast
from weather_poller.schemas.weather import Coordinates, WeatherRecord
from weather_poller.services.providers.base import BaseWeatherProvider
from weather_poller.services.providers.registry import register_provider

DARKSKY_API_BASE = "https://api.darksky.net"

# https://darksky.net/dev/docs#forecast-request
DARKSKY_FORECAST_PATH = "/forecast/{api_key}/{lat:f},{lon:f}?exclude=minutely,hourly,daily,alerts&lang=en&units=si"


def forecast_url(base_url: str, api_key: str, coordinates: Coordinates) -> str:
    path = DARKSKY_FORECAST_PATH.format(
        api_key=api_key,
        lat=coordinates.latitude,
        lon=coordinates.longitude,
    )
    return f"{base_url.rstrip('/')}{path}"


def darksky_to_weather(forecast: DarkSkyForecast) -> WeatherRecord:
    """Map the `currently` block of a Dark Sky forecast to a WeatherRecord.

    Humidity and cloud cover arrive as fractions and are truncated to whole
    percentages. precipIntensity is used as-is.
    """
    cur = forecast.currently
    return WeatherRecord(
        temperature=cur.temperature,
        pressure=cur.pressure,
        humidity=int(cur.humidity * 100),
        weather=cur.summary,
        wind_speed=cur.wind_speed,
        wind_deg=float(cur.wind_bearing),
        cloudiness=int(cur.cloud_cover * 100),
        rainfall=cur.precip_intensity,
    )


@register_provider("darksky")
class DarkSkyProvider(BaseWeatherProvider):
    """Current conditions from the Dark Sky forecast API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        coordinates: Coordinates,
        api_key: str,
        *,
        base_url: str = DARKSKY_API_BASE,
    ) -> None:
        super().__init__(client, coordinates, api_key, base_url=base_url)
        self.url = forecast_url(self.base_url, api_key, coordinates)

    async def fetch_forecast(self) -> DarkSkyForecast:
        data = await self._get_json(self.url)
        return self._parse(DarkSkyForecast, data)

    async def fetch(self) -> WeatherRecord:
        forecast = await self.fetch_forecast()
        return darksky_to_weather(forecast)
