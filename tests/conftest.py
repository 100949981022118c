"""Shared test fixtures."""

import pytest

from weather_overlay.core.cache import TTLCache
from weather_overlay.core.errors import FetchError
from weather_overlay.services.weather import CurrentWeather, Forecast, ForecastDay
from weather_overlay.widget.composer import LayoutComposer
from weather_overlay.widget.host import CanvasHost


class FakeFetcher:
    """Async single-shot fetcher that records when it was called and completed."""

    def __init__(self, name, log, result=None, error=None):
        self.name = name
        self.log = log
        self.result = result
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        self.log.append(f"{self.name}:start")
        if self.error is not None:
            self.log.append(f"{self.name}:failed")
            raise self.error
        self.log.append(f"{self.name}:done")
        return self.result


@pytest.fixture
def current_record():
    return CurrentWeather(
        temperature=65.0,
        weather_code=3,
        description="Overcast",
        wind_speed=12.5,
        apparent_temperature=63.0,
        humidity=70.0,
        city="San Francisco",
    )


@pytest.fixture
def forecast_record():
    return Forecast(
        city="San Francisco",
        days=[
            ForecastDay("2026-10-19", 0, "Clear", 72.0, 55.0, 0.0),
            ForecastDay("2026-10-20", 61, "Light Rain", 64.0, 52.0, 60.0),
            ForecastDay("2026-10-21", 3, "Overcast", 66.0, 54.0, 10.0),
        ],
    )


@pytest.fixture
def cache(tmp_path):
    return TTLCache(tmp_path / "cache")


@pytest.fixture
def host():
    return CanvasHost()


@pytest.fixture
def composer(host):
    return LayoutComposer(host)


@pytest.fixture
def fetch_log():
    return []


@pytest.fixture
def make_fetcher(fetch_log):
    def _make(name, result=None, error=None):
        return FakeFetcher(name, fetch_log, result=result, error=error)
    return _make


@pytest.fixture
def fetch_error():
    return FetchError("network unreachable")


@pytest.fixture
def mock_current_response():
    """Mock Open-Meteo current conditions response."""
    return {
        "current": {
            "temperature_2m": 65.0,
            "apparent_temperature": 63.0,
            "relative_humidity_2m": 70,
            "weather_code": 3,
            "wind_speed_10m": 12.5,
            "precipitation": 0.0,
            "snowfall": 0.0,
            "is_day": 1,
        }
    }


@pytest.fixture
def mock_current_response_rain():
    """Mock Open-Meteo response for rainy weather."""
    return {
        "current": {
            "temperature_2m": 55.0,
            "weather_code": 63,  # Rain
            "wind_speed_10m": 25.0,
            "precipitation": 5.5,
            "snowfall": 0.0,
            "is_day": 0,
        }
    }


@pytest.fixture
def mock_forecast_response():
    """Mock Open-Meteo daily forecast response."""
    return {
        "daily": {
            "time": ["2026-10-19", "2026-10-20", "2026-10-21"],
            "weather_code": [0, 61, 3],
            "temperature_2m_max": [72.0, 64.0, 66.0],
            "temperature_2m_min": [55.0, 52.0, 54.0],
            "precipitation_probability_max": [0, 60, 10],
        }
    }
