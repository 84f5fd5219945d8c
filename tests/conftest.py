import logging

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from weather_poller.core.config import Settings
from weather_poller.core.logging import JsonFormatter
from weather_poller.schemas.weather import Coordinates


OWM_KEY = "owm-test-key"
DARKSKY_KEY = "darksky-test-key"


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        owm_api_key=OWM_KEY,
        darksky_api_key=DARKSKY_KEY,
        google_cloud_project="test-project",
    )


@pytest.fixture()
def coordinates():
    return Coordinates(latitude=35.6620, longitude=139.7038)


@pytest.fixture()
def root_logger():
    """Root logger without JSON handlers left over from earlier tests."""
    root = logging.getLogger()
    level = root.level
    handlers = [h for h in root.handlers if not isinstance(h.formatter, JsonFormatter)]
    root.handlers = list(handlers)
    yield root
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture()
def metric_reader():
    return InMemoryMetricReader()


@pytest.fixture()
def meter_provider(metric_reader):
    provider = MeterProvider(metric_readers=[metric_reader], shutdown_on_exit=False)
    yield provider
    provider.shutdown()


def collect_points(reader: InMemoryMetricReader) -> dict:
    """Metric name -> data points, skipping metrics with nothing to report."""
    points = {}
    data = reader.get_metrics_data()
    if data is None:
        return points
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                dps = list(metric.data.data_points)
                if dps:
                    points[metric.name] = dps
    return points


def owm_current_payload(**overrides):
    payload = {
        "coord": {"lon": 139.7038, "lat": 35.662},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "main": {"temp": 15.2, "pressure": 1013, "humidity": 60},
        "wind": {"speed": 3.1, "deg": 180},
        "clouds": {"all": 80},
        "rain": {"3h": 1.5},
        "dt": 1560350645,
        "name": "Shibuya",
    }
    payload.update(overrides)
    return payload


def darksky_payload(**currently_overrides):
    currently = {
        "time": 1560350645,
        "summary": "Rain",
        "icon": "rain",
        "temperature": 10.0,
        "pressure": 1000,
        "humidity": 0.55,
        "windSpeed": 2.0,
        "windBearing": 90,
        "precipIntensity": 0.3,
        "cloudCover": 0.9,
        "uvIndex": 1,
    }
    currently.update(currently_overrides)
    return {
        "latitude": 35.662,
        "longitude": 139.7038,
        "timezone": "Asia/Tokyo",
        "currently": currently,
    }
