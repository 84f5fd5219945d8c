from __future__ import annotations

import logging

from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.metrics.view import DropAggregation, LastValueAggregation, View
from opentelemetry.sdk.resources import Resource

from weather_poller.core.config import Settings
from weather_poller.core.errors import ExporterInitError
from weather_poller.services.metrics.measures import MEASURES, Measure

logger = logging.getLogger(__name__)

METER_NAME = "weather_poller"
DEFAULT_METRIC_PREFIX = "custom.googleapis.com"


def get_metric_type(name: str, prefix: str = DEFAULT_METRIC_PREFIX) -> str:
    """Cloud Monitoring metric type for a measure.

    CloudMonitoringMetricsExporter builds the same "<prefix>/<name>" string from
    the prefix it is constructed with, so both must be given the same prefix.
    """
    return f"{prefix}/{name}"


def build_resource(settings: Settings) -> Resource:
    """Resource attributes that Cloud Monitoring maps onto a generic_node.

    location <- cloud.availability_zone, namespace <- service.namespace,
    node_id <- host.id

    Resource.create would add service.name and service.instance.id, which make
    the exporter pick generic_task instead.
    """
    return Resource(
        {
            "service.namespace": settings.resource_namespace,
            "cloud.availability_zone": settings.resource_location,
            "host.id": settings.resource_node_id,
        }
    )


def build_views(measures: tuple[Measure, ...] = MEASURES) -> list[View]:
    views = []
    for m in measures:
        aggregation = LastValueAggregation() if m.exported else DropAggregation()
        views.append(View(instrument_name=m.name, description=m.description, aggregation=aggregation))
    return views


def create_cloud_monitoring_reader(settings: Settings) -> PeriodicExportingMetricReader:
    # Imported lazily so the Google client stack is only loaded when exporting for real.
    from opentelemetry.exporter.cloud_monitoring import CloudMonitoringMetricsExporter

    try:
        exporter = CloudMonitoringMetricsExporter(
            project_id=settings.google_cloud_project or None,
            prefix=settings.metric_prefix,
        )
    except Exception as exc:
        raise ExporterInitError(f"failed to initialize Cloud Monitoring exporter: {exc}") from exc

    return PeriodicExportingMetricReader(
        exporter,
        export_interval_millis=settings.report_interval_seconds * 1000,
    )


class MetricsExporter:
    """Owns the meter provider for the lifetime of the process."""

    def __init__(self, meter_provider: MeterProvider) -> None:
        self.meter_provider = meter_provider
        self._flushed = False

    @property
    def meter(self) -> Meter:
        return self.meter_provider.get_meter(METER_NAME)

    @property
    def flushed(self) -> bool:
        return self._flushed

    def flush(self) -> None:
        """Export buffered points and shut the provider down. Runs once."""
        if self._flushed:
            return
        self._flushed = True
        logger.info("flushing metrics exporter")
        self.meter_provider.shutdown()


def init_metrics(settings: Settings, reader: MetricReader | None = None) -> MetricsExporter:
    if reader is None:
        reader = create_cloud_monitoring_reader(settings)

    provider = MeterProvider(
        metric_readers=[reader],
        resource=build_resource(settings),
        views=build_views(),
        shutdown_on_exit=False,
    )
    for m in MEASURES:
        if m.exported:
            logger.info(
                "exporting %s as %s every %ss",
                m.name,
                get_metric_type(m.name, settings.metric_prefix),
                settings.report_interval_seconds,
            )
    return MetricsExporter(provider)
