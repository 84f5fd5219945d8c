from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# https://darksky.net/dev/docs#data-point


class DarkSkyCurrently(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time: int = 0
    summary: str = ""
    icon: str = ""
    temperature: float = 0.0
    pressure: float = 0.0
    humidity: float = Field(0.0, ge=0.0, le=1.0)
    wind_speed: float = Field(0.0, alias="windSpeed")
    wind_bearing: int = Field(0, alias="windBearing")
    precip_intensity: float = Field(0.0, alias="precipIntensity")
    cloud_cover: float = Field(0.0, alias="cloudCover", ge=0.0, le=1.0)
    uv_index: float = Field(0.0, alias="uvIndex")


class DarkSkyForecast(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0
    timezone: str = ""
    currently: DarkSkyCurrently
