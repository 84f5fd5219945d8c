from __future__ import annotations

# Import to register providers
from weather_poller.services.providers import darksky, openweathermap  # noqa: F401
from weather_poller.services.providers.base import BaseWeatherProvider
from weather_poller.services.providers.darksky import DarkSkyProvider, darksky_to_weather
from weather_poller.services.providers.openweathermap import OpenWeatherMapProvider, owm_to_weather
from weather_poller.services.providers.registry import (
    get_provider_class,
    register_provider,
)

__all__ = [
    "BaseWeatherProvider",
    "DarkSkyProvider",
    "OpenWeatherMapProvider",
    "darksky_to_weather",
    "owm_to_weather",
    "register_provider",
    "get_provider_class",
]
