from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from weather_poller.core.errors import DecodeError, FetchError, ProviderInitError
from weather_poller.schemas.weather import Coordinates, WeatherRecord

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseWeatherProvider(ABC):
    """Abstract base class for all weather providers."""

    source_id: str

    def __init__(
        self,
        client: httpx.AsyncClient,
        coordinates: Coordinates,
        api_key: str,
        *,
        base_url: str,
    ) -> None:
        if not api_key:
            raise ProviderInitError("API key is not configured", source=self.source_id)
        self.client = client
        self.coordinates = coordinates
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def initialize(self) -> None:
        """Prime the provider once before the first tick."""
        return None

    @abstractmethod
    async def fetch(self) -> WeatherRecord:
        """Fetch current conditions and map them to a WeatherRecord."""
        pass

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        try:
            resp = await self.client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise FetchError(f"request failed: {type(exc).__name__}: {exc}", source=self.source_id) from exc

        if not resp.is_success:
            raise FetchError(f"upstream status {resp.status_code}", source=self.source_id)

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"response is not JSON: {exc}", source=self.source_id) from exc

    def _parse(self, schema: type[ModelT], data: Any) -> ModelT:
        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(
                f"unexpected {schema.__name__} payload: {exc.error_count()} validation error(s)",
                source=self.source_id,
            ) from exc
