from __future__ import annotations

from weather_poller.schemas.darksky import DarkSkyForecast
from weather_poller.schemas.openweathermap import OWMCurrentResponse, OWMUVResponse
from weather_poller.schemas.weather import Coordinates, WeatherRecord

__all__ = ["Coordinates", "WeatherRecord", "OWMCurrentResponse", "OWMUVResponse", "DarkSkyForecast"]
