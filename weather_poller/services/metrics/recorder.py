from __future__ import annotations

import logging
from typing import Mapping

from opentelemetry.metrics import Meter

from weather_poller.core.errors import RecordError
from weather_poller.schemas.weather import WeatherRecord
from weather_poller.services.metrics.measures import (
    HUMIDITY,
    KEY_NODE_ID,
    MEASURES,
    PRESSURE,
    TEMPERATURE,
    WIND_SPEED,
)

logger = logging.getLogger(__name__)

MAX_TAG_VALUE_LENGTH = 255


def validate_tag_value(value: str) -> None:
    if not value:
        raise ValueError("tag value is empty")
    if len(value) > MAX_TAG_VALUE_LENGTH:
        raise ValueError(f"tag value is longer than {MAX_TAG_VALUE_LENGTH} characters")
    if not all(" " <= ch <= "~" for ch in value):
        raise ValueError("tag value must be printable ASCII")


class MetricsRecorder:
    """Submit the exported subset of a WeatherRecord as gauge measurements."""

    def __init__(self, meter: Meter, default_labels: Mapping[str, str] | None = None) -> None:
        self._default_labels = dict(default_labels or {})
        self._gauges = {
            m.name: meter.create_gauge(m.name, unit=m.unit, description=m.description) for m in MEASURES
        }

    def record(self, source_id: str, record: WeatherRecord) -> None:
        try:
            validate_tag_value(source_id)
        except ValueError as exc:
            logger.error("failed to insert key %s=%r: %s", KEY_NODE_ID, source_id, exc)
            raise RecordError(str(exc), source=source_id) from exc

        attributes = {**self._default_labels, KEY_NODE_ID: source_id}
        batch = (
            (TEMPERATURE, record.temperature),
            (PRESSURE, record.pressure),
            (HUMIDITY, record.humidity),
            (WIND_SPEED, record.wind_speed),
        )
        for measure, value in batch:
            self._gauges[measure.name].set(measure.value_type(value), attributes=attributes)
        logger.debug("recorded %d measurements for %s", len(batch), source_id)
