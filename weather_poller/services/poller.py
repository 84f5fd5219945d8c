from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from weather_poller.core.errors import WeatherPollerError
from weather_poller.services.metrics.recorder import MetricsRecorder
from weather_poller.services.providers.base import BaseWeatherProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollJob:
    source_id: str
    interval_seconds: float
    provider: BaseWeatherProvider


@dataclass(frozen=True)
class TickResult:
    source_id: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Poller:
    """Run one periodic fetch-map-record job per provider until stopped.

    Each job ticks on its own schedule in its own task, so a slow upstream on
    one job does not hold back the other. Tick outcomes are reported to the
    coordinator through a queue.
    """

    def __init__(self, jobs: list[PollJob], recorder: MetricsRecorder) -> None:
        self.jobs = jobs
        self.recorder = recorder
        self.results: asyncio.Queue[TickResult] = asyncio.Queue()

    async def tick(self, job: PollJob) -> TickResult:
        try:
            record = await job.provider.fetch()
            self.recorder.record(job.source_id, record)
        except WeatherPollerError as exc:
            return TickResult(job.source_id, exc)
        except Exception as exc:
            logger.exception("unexpected error while polling %s", job.source_id)
            return TickResult(job.source_id, exc)
        return TickResult(job.source_id)

    async def _run_periodically(self, job: PollJob) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + job.interval_seconds
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            result = await self.tick(job)
            await self.results.put(result)

            # Ticks missed while a fetch was in flight are dropped, not queued up.
            next_at += job.interval_seconds
            now = loop.time()
            if next_at <= now:
                skipped = int((now - next_at) // job.interval_seconds) + 1
                next_at += skipped * job.interval_seconds

    def _handle_result(self, result: TickResult) -> None:
        if result.ok:
            logger.debug("tick completed for %s", result.source_id)
        else:
            logger.error("failed to poll %s: %s", result.source_id, result.error)

    async def run(self, stop: asyncio.Event) -> None:
        tasks = [
            asyncio.create_task(self._run_periodically(job), name=f"poll-{job.source_id}") for job in self.jobs
        ]
        for job in self.jobs:
            logger.info("polling %s every %ss", job.source_id, job.interval_seconds)

        stop_waiter = asyncio.create_task(stop.wait())
        try:
            while not stop.is_set():
                getter = asyncio.create_task(self.results.get())
                done, _ = await asyncio.wait({getter, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)
                if getter in done:
                    self._handle_result(getter.result())
                else:
                    getter.cancel()
        finally:
            stop_waiter.cancel()
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, stop_waiter, return_exceptions=True)
            while not self.results.empty():
                self._handle_result(self.results.get_nowait())
            logger.info("poller stopped")
