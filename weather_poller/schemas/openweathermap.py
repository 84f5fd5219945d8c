from __future__ import annotations

from pydantic import BaseModel, Field


# https://openweathermap.org/current#current_JSON


class OWMMain(BaseModel):
    temp: float
    pressure: float
    humidity: int


class OWMCondition(BaseModel):
    id: int | None = None
    main: str
    description: str | None = None
    icon: str | None = None


class OWMWind(BaseModel):
    speed: float = 0.0
    deg: float = 0.0


class OWMClouds(BaseModel):
    all: int = 0


class OWMRain(BaseModel):
    three_h: float = Field(0.0, alias="3h")


class OWMCurrentResponse(BaseModel):
    main: OWMMain
    weather: list[OWMCondition] = Field(..., min_length=1)
    wind: OWMWind = Field(default_factory=OWMWind)
    clouds: OWMClouds = Field(default_factory=OWMClouds)
    rain: OWMRain = Field(default_factory=OWMRain)
    name: str | None = None
    dt: int | None = None


class OWMUVResponse(BaseModel):
    lat: float | None = None
    lon: float | None = None
    date_iso: str | None = None
    date: int | None = None
    value: float
