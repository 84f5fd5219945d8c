from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Measure:
    name: str
    description: str
    unit: str
    value_type: type
    exported: bool


TEMPERATURE = Measure("temperature", "air temperature", "C", float, exported=True)
PRESSURE = Measure("pressure", "barometric pressure", "hPa", float, exported=True)
# Humidity is recorded but its view is disabled.
HUMIDITY = Measure("humidity", "air humidity", "%", int, exported=False)
WIND_SPEED = Measure("windspeed", "wind speed", "mps", float, exported=True)
WIND_DEG = Measure("winddeg", "wind degree from North", "degree", float, exported=False)

MEASURES: tuple[Measure, ...] = (TEMPERATURE, PRESSURE, HUMIDITY, WIND_SPEED, WIND_DEG)

# Label key for the polling source on every recording.
KEY_NODE_ID = "node_id"
