from __future__ import annotations

import httpx

from weather_poller.core.config import Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    limits = httpx.Limits(max_keepalive_connections=4, max_connections=8)
    timeout = httpx.Timeout(settings.http_timeout_seconds)
    return httpx.AsyncClient(
        timeout=timeout,
        limits=limits,
        headers={"User-Agent": "weather-poller/0.1"},
        follow_redirects=True,
    )
