from __future__ import annotations

from typing import Type

from weather_poller.services.providers.base import BaseWeatherProvider

# Registry mapping source ids to provider classes
_provider_registry: dict[str, Type[BaseWeatherProvider]] = {}


def register_provider(source_id: str):
    """Decorator to register a weather provider."""

    def decorator(cls: Type[BaseWeatherProvider]):
        _provider_registry[source_id] = cls
        cls.source_id = source_id
        return cls

    return decorator


def get_provider_class(source_id: str) -> Type[BaseWeatherProvider] | None:
    """Get the provider class for a source id."""
    return _provider_registry.get(source_id)
