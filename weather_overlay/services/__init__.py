"""External services - weather fetchers and location lookup."""

from .location import get_location
from .weather import (
    CurrentWeather,
    Forecast,
    ForecastDay,
    fetch_current_weather,
    fetch_forecast,
    make_fetchers,
)

__all__ = [
    "get_location",
    "CurrentWeather",
    "Forecast",
    "ForecastDay",
    "fetch_current_weather",
    "fetch_forecast",
    "make_fetchers",
]
