from __future__ import annotations

import asyncio
import logging
import signal
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
from opentelemetry.sdk.metrics.export import MetricReader
from pydantic import ValidationError

from weather_poller.core.config import Settings, get_settings
from weather_poller.core.errors import ExporterInitError, ProviderInitError
from weather_poller.core.http import create_http_client
from weather_poller.core.logging import setup_logging
from weather_poller.services.metrics import MetricsExporter, MetricsRecorder, init_metrics
from weather_poller.services.poller import PollJob, Poller
from weather_poller.services.providers import get_provider_class

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    client: httpx.AsyncClient
    exporter: MetricsExporter
    poller: Poller


def _provider_options(settings: Settings) -> dict[str, tuple[str, str, float]]:
    """source id -> (api key, base url, poll interval)"""
    return {
        "openweathermap": (settings.owm_api_key, settings.owm_base_url, settings.owm_poll_interval_seconds),
        "darksky": (settings.darksky_api_key, settings.darksky_base_url, settings.darksky_poll_interval_seconds),
    }


def build_jobs(settings: Settings, client: httpx.AsyncClient) -> list[PollJob]:
    options = _provider_options(settings)
    jobs = []
    for source_id in settings.sources:
        provider_cls = get_provider_class(source_id)
        if provider_cls is None or source_id not in options:
            raise ProviderInitError("unknown provider", source=source_id)
        api_key, base_url, interval = options[source_id]
        provider = provider_cls(client, settings.coordinates, api_key, base_url=base_url)
        jobs.append(PollJob(source_id, interval, provider))
    return jobs


@asynccontextmanager
async def lifespan(settings: Settings, reader: MetricReader | None = None) -> AsyncIterator[Runtime]:
    client = create_http_client(settings)
    exporter: MetricsExporter | None = None
    try:
        jobs = build_jobs(settings, client)
        for job in jobs:
            await job.provider.initialize()

        exporter = init_metrics(settings, reader)
        recorder = MetricsRecorder(
            exporter.meter,
            default_labels={"source": settings.monitoring_source_label},
        )
        yield Runtime(client=client, exporter=exporter, poller=Poller(jobs, recorder))
    finally:
        await client.aclose()
        if exporter is not None:
            exporter.flush()


async def run(
    settings: Settings,
    reader: MetricReader | None = None,
    stop: asyncio.Event | None = None,
) -> None:
    if stop is None:
        stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Not available on every platform or outside the main thread.
            logger.warning("cannot install handler for %s", sig.name)
        else:
            installed.append(sig)

    try:
        async with lifespan(settings, reader) as runtime:
            await runtime.poller.run(stop)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def main() -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        setup_logging()
        logger.critical("invalid configuration: %s", exc)
        return 1

    setup_logging(settings.log_level)

    try:
        asyncio.run(run(settings))
    except ProviderInitError as exc:
        logger.critical("failed to initialize provider: %s", exc)
        return 1
    except ExporterInitError as exc:
        logger.critical("failed to initialize exporter: %s", exc)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
