import httpx
import pytest
import respx
from httpx import Response

from conftest import OWM_KEY, owm_current_payload
from weather_poller.core.errors import DecodeError, FetchError, ProviderInitError
from weather_poller.schemas import OWMCurrentResponse
from weather_poller.services.providers import OpenWeatherMapProvider, get_provider_class


OWM_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
OWM_UV_URL = "https://api.openweathermap.org/data/2.5/uvi"


def test_provider_is_registered():
    assert get_provider_class("openweathermap") is OpenWeatherMapProvider
    assert OpenWeatherMapProvider.source_id == "openweathermap"


@pytest.mark.asyncio
async def test_missing_api_key_is_fatal(coordinates):
    async with httpx.AsyncClient() as client:
        with pytest.raises(ProviderInitError):
            OpenWeatherMapProvider(client, coordinates, "")


@pytest.mark.asyncio
async def test_unsupported_unit_is_fatal(coordinates):
    async with httpx.AsyncClient() as client:
        with pytest.raises(ProviderInitError):
            OpenWeatherMapProvider(client, coordinates, OWM_KEY, unit="X")


@pytest.mark.asyncio
async def test_fetch_uses_uv_from_startup(coordinates):
    with respx.mock:
        uv_route = respx.get(OWM_UV_URL).mock(
            return_value=Response(200, json={"lat": 35.662, "lon": 139.7038, "value": 4.2})
        )
        weather_route = respx.get(OWM_WEATHER_URL).mock(return_value=Response(200, json=owm_current_payload()))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            await provider.initialize()
            first = await provider.fetch()
            second = await provider.fetch()

        assert uv_route.call_count == 1
        assert weather_route.call_count == 2
        assert first == second
        assert first.uv == 4.2
        assert first.rainfall == 0.5
        assert first.weather == "Clouds"

        params = weather_route.calls.last.request.url.params
        assert params["appid"] == OWM_KEY
        assert params["units"] == "metric"
        assert params["lang"] == "en"
        assert float(params["lat"]) == coordinates.latitude
        assert float(params["lon"]) == coordinates.longitude


@pytest.mark.asyncio
async def test_uv_failure_at_startup_is_fatal(coordinates):
    with respx.mock:
        respx.get(OWM_UV_URL).mock(return_value=Response(401, json={"cod": 401, "message": "Invalid API key"}))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            with pytest.raises(ProviderInitError):
                await provider.initialize()


@pytest.mark.asyncio
async def test_fetch_transport_error_is_fetch_error(coordinates):
    with respx.mock:
        respx.get(OWM_UV_URL).mock(return_value=Response(200, json={"value": 1.0}))
        respx.get(OWM_WEATHER_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            await provider.initialize()
            with pytest.raises(FetchError) as excinfo:
                await provider.fetch()

    assert excinfo.value.source == "openweathermap"


@pytest.mark.asyncio
async def test_fetch_timeout_is_fetch_error(coordinates):
    with respx.mock:
        respx.get(OWM_UV_URL).mock(return_value=Response(200, json={"value": 1.0}))
        respx.get(OWM_WEATHER_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            await provider.initialize()
            with pytest.raises(FetchError):
                await provider.fetch()


@pytest.mark.asyncio
async def test_fetch_http_error_is_fetch_error(coordinates):
    with respx.mock:
        respx.get(OWM_UV_URL).mock(return_value=Response(200, json={"value": 1.0}))
        respx.get(OWM_WEATHER_URL).mock(return_value=Response(503))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            await provider.initialize()
            with pytest.raises(FetchError):
                await provider.fetch()


@pytest.mark.asyncio
async def test_fetch_malformed_body_is_decode_error(coordinates):
    with respx.mock:
        respx.get(OWM_UV_URL).mock(return_value=Response(200, json={"value": 1.0}))
        respx.get(OWM_WEATHER_URL).mock(return_value=Response(200, json={"cod": 200, "weather": []}))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            await provider.initialize()
            with pytest.raises(DecodeError):
                await provider.fetch()


@pytest.mark.asyncio
async def test_fetch_before_initialize_fails(coordinates):
    async with httpx.AsyncClient() as client:
        provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
        with pytest.raises(FetchError):
            await provider.fetch()


@pytest.mark.asyncio
async def test_fetch_current_returns_parsed_model(coordinates):
    with respx.mock:
        respx.get(OWM_WEATHER_URL).mock(return_value=Response(200, json=owm_current_payload()))

        async with httpx.AsyncClient() as client:
            provider = OpenWeatherMapProvider(client, coordinates, OWM_KEY)
            current = await provider.fetch_current()

    assert isinstance(current, OWMCurrentResponse)
    assert current.main.humidity == 60
    assert current.rain.three_h == 1.5
