from __future__ import annotations

import logging

import httpx

from weather_poller.core.errors import FetchError, ProviderInitError, WeatherPollerError
from weather_poller.schemas.openweathermap import OWMCurrentResponse, OWMUVResponse
from weather_poller.schemas.weather import Coordinates, WeatherRecord
from weather_poller.services.providers.base import BaseWeatherProvider
from weather_poller.services.providers.registry import register_provider

logger = logging.getLogger(__name__)

OWM_API_BASE = "https://api.openweathermap.org/data/2.5"

# Unit and language codes accepted by the client, mapped to query values.
OWM_UNITS = {"C": "metric", "F": "imperial", "K": "standard"}
OWM_LANGS = {"EN": "en", "JA": "ja", "DE": "de", "FR": "fr", "ES": "es"}


def owm_to_weather(current: OWMCurrentResponse, uv: OWMUVResponse | None) -> WeatherRecord:
    """Map an OpenWeatherMap current-conditions payload plus UV index to a WeatherRecord.

    OpenWeatherMap reports rain accumulated over the last 3 hours; it is
    divided by 3 to approximate an hourly rate.
    """
    return WeatherRecord(
        temperature=current.main.temp,
        pressure=current.main.pressure,
        humidity=current.main.humidity,
        weather=current.weather[0].main,
        wind_speed=current.wind.speed,
        wind_deg=current.wind.deg,
        cloudiness=current.clouds.all,
        rainfall=current.rain.three_h / 3,
        uv=uv.value if uv is not None else 0.0,
    )


@register_provider("openweathermap")
class OpenWeatherMapProvider(BaseWeatherProvider):
    """Current conditions and UV index from OpenWeatherMap."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        coordinates: Coordinates,
        api_key: str,
        *,
        unit: str = "C",
        lang: str = "EN",
        base_url: str = OWM_API_BASE,
    ) -> None:
        super().__init__(client, coordinates, api_key, base_url=base_url)
        if unit not in OWM_UNITS:
            raise ProviderInitError(f"unsupported unit: {unit}", source=self.source_id)
        if lang not in OWM_LANGS:
            raise ProviderInitError(f"unsupported language: {lang}", source=self.source_id)
        self.units = OWM_UNITS[unit]
        self.lang = OWM_LANGS[lang]
        self.uv: OWMUVResponse | None = None

    async def initialize(self) -> None:
        # The UV index is fetched once at startup and reused for every tick.
        try:
            self.uv = await self.fetch_uv()
        except WeatherPollerError as exc:
            raise ProviderInitError(f"failed to fetch UV index: {exc}", source=self.source_id) from exc
        logger.info("OpenWeatherMap UV index at startup: %s", self.uv.value)

    async def fetch_current(self) -> OWMCurrentResponse:
        params = {
            "lat": self.coordinates.latitude,
            "lon": self.coordinates.longitude,
            "units": self.units,
            "lang": self.lang,
            "appid": self.api_key,
        }
        data = await self._get_json(f"{self.base_url}/weather", params=params)
        return self._parse(OWMCurrentResponse, data)

    async def fetch_uv(self) -> OWMUVResponse:
        params = {
            "lat": self.coordinates.latitude,
            "lon": self.coordinates.longitude,
            "appid": self.api_key,
        }
        data = await self._get_json(f"{self.base_url}/uvi", params=params)
        return self._parse(OWMUVResponse, data)

    async def fetch(self) -> WeatherRecord:
        if self.uv is None:
            raise FetchError("provider was not initialized", source=self.source_id)
        current = await self.fetch_current()
        return owm_to_weather(current, self.uv)
