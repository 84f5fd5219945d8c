from __future__ import annotations

from weather_poller.services.metrics.exporter import MetricsExporter, get_metric_type, init_metrics
from weather_poller.services.metrics.measures import MEASURES, Measure
from weather_poller.services.metrics.recorder import MetricsRecorder

__all__ = ["MEASURES", "Measure", "MetricsExporter", "MetricsRecorder", "get_metric_type", "init_metrics"]
