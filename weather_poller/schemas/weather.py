from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class WeatherRecord(BaseModel):
    """Provider-independent snapshot of current conditions at the target location."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Air temperature (C).")
    pressure: float = Field(..., description="Barometric pressure (hPa).")
    humidity: int = Field(..., description="Relative humidity (%).")
    weather: str = Field("", description="Short condition label, e.g. 'Clear'.")
    wind_speed: float = Field(0.0, description="Wind speed (m/s).")
    wind_deg: float = Field(0.0, description="Wind direction (degrees from north).")
    cloudiness: int = Field(0, description="Cloud cover (%).")
    rainfall: float = Field(0.0, description="Rainfall rate (mm/h).")
    snowfall: float = Field(0.0, description="Snowfall rate, never populated by the current providers.")
    uv: float = Field(0.0, description="UV index, OpenWeatherMap only.")
