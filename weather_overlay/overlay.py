"""Wires cache, composer, fetchers and a host into one overlay instance."""

from __future__ import annotations

from typing import Optional

from .core.cache import TTLCache
from .core.orchestrator import FetchOrchestrator
from .services.location import get_location
from .services.weather import make_fetchers
from .widget.composer import LayoutComposer
from .widget.config import OverlayConfig
from .widget.host import OverlayHost


def create_overlay(
    host: OverlayHost,
    config: OverlayConfig,
    cache: Optional[TTLCache] = None,
    location: Optional[tuple[float, float, str]] = None,
) -> FetchOrchestrator:
    """
    Build an orchestrator that fetches from Open-Meteo for the configured location.

    *location* is a resolved (latitude, longitude, city); without it the
    location is looked up here, which may block on the network.
    """
    weather = config.weather
    if location is None:
        location = resolve_location(config)
    latitude, longitude, city = location
    fetch_current, fetch_forecast = make_fetchers(
        latitude,
        longitude,
        city=city,
        temperature_unit=weather.temperature_unit,
        wind_speed_unit=weather.wind_speed_unit,
        forecast_days=weather.forecast_days,
    )
    return FetchOrchestrator(
        composer=LayoutComposer(host),
        fetch_current=fetch_current,
        fetch_forecast=fetch_forecast,
        cache=cache or TTLCache(config.cache_dir),
    )


def resolve_location(config: OverlayConfig) -> tuple[float, float, str]:
    """Configured coordinates, or a (blocking) lookup when they are missing."""
    weather = config.weather
    return get_location(weather.latitude, weather.longitude, weather.city)
