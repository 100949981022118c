"""Current conditions and daily forecast via the Open-Meteo API."""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Awaitable, Callable, TypeVar

import requests

from ..core.errors import FetchError

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
REQUEST_TIMEOUT = 10

CURRENT_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "weather_code",
    "wind_speed_10m",
    "precipitation",
    "snowfall",
    "is_day",
)

DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
)

# WMO Weather interpretation codes
# https://open-meteo.com/en/docs
WEATHER_CODES = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Icy Fog",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    61: "Light Rain",
    63: "Rain",
    65: "Heavy Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    80: "Light Showers",
    81: "Showers",
    82: "Heavy Showers",
    95: "Thunderstorm",
}


@dataclass
class CurrentWeather:
    """Current conditions record, as cached in Weather.json."""

    temperature: float
    weather_code: int
    description: str
    wind_speed: float
    apparent_temperature: float = 0.0
    humidity: float = 0.0
    precipitation: float = 0.0  # mm
    snowfall: float = 0.0  # cm
    is_day: bool = True
    city: str = ""

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "temperature": self.temperature,
            "weather_code": self.weather_code,
            "description": self.description,
            "wind_speed": self.wind_speed,
            "apparent_temperature": self.apparent_temperature,
            "humidity": self.humidity,
            "precipitation": self.precipitation,
            "snowfall": self.snowfall,
            "is_day": self.is_day,
            "city": self.city,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "CurrentWeather":
        """Decode a cached payload. Raises KeyError/TypeError/ValueError if malformed."""
        if not isinstance(d, dict):
            raise TypeError(f"expected object, got {type(d).__name__}")
        return cls(
            temperature=float(d["temperature"]),
            weather_code=int(d["weather_code"]),
            description=str(d["description"]),
            wind_speed=float(d["wind_speed"]),
            apparent_temperature=float(d.get("apparent_temperature", 0.0)),
            humidity=float(d.get("humidity", 0.0)),
            precipitation=float(d.get("precipitation", 0.0)),
            snowfall=float(d.get("snowfall", 0.0)),
            is_day=bool(d.get("is_day", True)),
            city=str(d.get("city", "")),
        )


@dataclass
class ForecastDay:
    date: str  # ISO date
    weather_code: int
    description: str
    temp_max: float
    temp_min: float
    precipitation_probability: float = 0.0

    @property
    def weekday(self) -> str:
        """Three-letter weekday name, e.g. 'Mon'."""
        return date.fromisoformat(self.date).strftime("%a")

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "weather_code": self.weather_code,
            "description": self.description,
            "temp_max": self.temp_max,
            "temp_min": self.temp_min,
            "precipitation_probability": self.precipitation_probability,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ForecastDay":
        return cls(
            date=date.fromisoformat(d["date"]).isoformat(),
            weather_code=int(d["weather_code"]),
            description=str(d["description"]),
            temp_max=float(d["temp_max"]),
            temp_min=float(d["temp_min"]),
            precipitation_probability=float(d.get("precipitation_probability", 0.0)),
        )


@dataclass
class Forecast:
    """Daily forecast record, as cached in Forecast.json."""

    days: list[ForecastDay] = field(default_factory=list)
    city: str = ""

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "days": [day.to_dict() for day in self.days],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Forecast":
        if not isinstance(d, dict):
            raise TypeError(f"expected object, got {type(d).__name__}")
        days = d["days"]
        if not isinstance(days, list):
            raise TypeError("days must be a list")
        return cls(
            days=[ForecastDay.from_dict(day) for day in days],
            city=str(d.get("city", "")),
        )


def weather_code_to_desc(code: int) -> str:
    """Convert WMO weather code to human-readable description."""
    return WEATHER_CODES.get(code, "Unknown")


def _get_json(params: dict) -> dict:
    try:
        response = requests.get(OPEN_METEO_URL, params=params, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise FetchError(f"Open-Meteo request failed: {e}") from e
    except ValueError as e:
        raise FetchError(f"Open-Meteo returned invalid JSON: {e}") from e


def fetch_current_weather(
    latitude: float,
    longitude: float,
    city: str = "",
    temperature_unit: str = "fahrenheit",
    wind_speed_unit: str = "mph",
) -> CurrentWeather:
    """
    Fetch current conditions from Open-Meteo.

    Raises:
        FetchError: On network, HTTP or payload errors
    """
    data = _get_json({
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_FIELDS),
        "temperature_unit": temperature_unit,
        "wind_speed_unit": wind_speed_unit,
    })

    current = data.get("current")
    if not isinstance(current, dict):
        raise FetchError("Open-Meteo response has no current conditions")

    try:
        weather_code = int(current.get("weather_code", 0))
        return CurrentWeather(
            temperature=float(current["temperature_2m"]),
            weather_code=weather_code,
            description=weather_code_to_desc(weather_code),
            wind_speed=float(current.get("wind_speed_10m", 0)),
            apparent_temperature=float(current.get("apparent_temperature", current["temperature_2m"])),
            humidity=float(current.get("relative_humidity_2m", 0)),
            precipitation=float(current.get("precipitation", 0)),
            snowfall=float(current.get("snowfall", 0)),
            is_day=bool(current.get("is_day", 1)),
            city=city,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"Malformed current conditions: {e}") from e


def fetch_forecast(
    latitude: float,
    longitude: float,
    city: str = "",
    days: int = 5,
    temperature_unit: str = "fahrenheit",
) -> Forecast:
    """
    Fetch a daily forecast from Open-Meteo.

    Raises:
        FetchError: On network, HTTP or payload errors
    """
    data = _get_json({
        "latitude": latitude,
        "longitude": longitude,
        "daily": ",".join(DAILY_FIELDS),
        "temperature_unit": temperature_unit,
        "forecast_days": days,
        "timezone": "auto",
    })

    daily = data.get("daily")
    if not isinstance(daily, dict):
        raise FetchError("Open-Meteo response has no daily forecast")

    try:
        codes = daily["weather_code"]
        probabilities = daily.get("precipitation_probability_max") or [0] * len(codes)
        forecast_days = [
            ForecastDay(
                date=day,
                weather_code=int(code),
                description=weather_code_to_desc(int(code)),
                temp_max=float(high),
                temp_min=float(low),
                precipitation_probability=float(prob or 0),
            )
            for day, code, high, low, prob in zip(
                daily["time"],
                codes,
                daily["temperature_2m_max"],
                daily["temperature_2m_min"],
                probabilities,
            )
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"Malformed daily forecast: {e}") from e

    if not forecast_days:
        raise FetchError("Open-Meteo returned an empty forecast")
    return Forecast(days=forecast_days, city=city)


T = TypeVar("T")


def run_blocking(func: Callable[..., T], *args, **kwargs) -> Callable[[], Awaitable[T]]:
    """Wrap a blocking fetch as a single-shot coroutine function.

    The call runs in the loop's default executor so the event loop (the
    host's update path) never waits on the network.
    """
    call = functools.partial(func, *args, **kwargs)

    async def fetch() -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, call)

    fetch.__name__ = getattr(func, "__name__", "fetch")
    return fetch


def make_fetchers(
    latitude: float,
    longitude: float,
    city: str = "",
    temperature_unit: str = "fahrenheit",
    wind_speed_unit: str = "mph",
    forecast_days: int = 5,
) -> tuple[Callable[[], Awaitable[CurrentWeather]], Callable[[], Awaitable[Forecast]]]:
    """Build the (current, forecast) async fetchers for one location."""
    fetch_current = run_blocking(
        fetch_current_weather,
        latitude,
        longitude,
        city=city,
        temperature_unit=temperature_unit,
        wind_speed_unit=wind_speed_unit,
    )
    fetch_daily = run_blocking(
        fetch_forecast,
        latitude,
        longitude,
        city=city,
        days=forecast_days,
        temperature_unit=temperature_unit,
    )
    return fetch_current, fetch_daily
