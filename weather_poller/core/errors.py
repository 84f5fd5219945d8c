from __future__ import annotations


class WeatherPollerError(Exception):
    """Base class for every error raised by the poller."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        message = super().__str__()
        if self.source:
            return f"[{self.source}] {message}"
        return message


# Fatal at startup


class ProviderInitError(WeatherPollerError):
    """A provider client could not be constructed or primed."""


class ExporterInitError(WeatherPollerError):
    """The metrics exporter could not be constructed."""


# Recoverable per tick


class FetchError(WeatherPollerError):
    """The upstream call failed or returned a non-success status."""


class DecodeError(WeatherPollerError):
    """The upstream body could not be parsed into the expected schema."""


class RecordError(WeatherPollerError):
    """Measurements could not be tagged or submitted."""
