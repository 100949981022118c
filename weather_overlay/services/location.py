"""Location lookup: configured coordinates, CoreLocation (macOS) or IP geolocation."""

from __future__ import annotations

import json
import logging
import subprocess
import time as _time
from typing import Optional

import requests

logger = logging.getLogger(__name__)

# CoreLocationCLI (OPTIONAL: installed via: brew install corelocationcli)
CORELOCATION_CMD = "CoreLocationCLI"
_corelocation_available: bool | None = None  # Lazy-checked on first use

IP_API_URL = "http://ip-api.com/json/"

# Default location (San Francisco)
DEFAULT_LOCATION = (37.7749, -122.4194, "San Francisco")

_cache: tuple[float, float, str] | None = None
_cache_time: float = 0.0


def _is_corelocation_available() -> bool:
    """Check if CoreLocationCLI is available on the system."""
    global _corelocation_available
    if _corelocation_available is not None:
        return _corelocation_available

    try:
        result = subprocess.run(["which", CORELOCATION_CMD], capture_output=True, timeout=2)
        _corelocation_available = result.returncode == 0
    except (subprocess.TimeoutExpired, OSError):
        _corelocation_available = False
    return _corelocation_available


def _get_location_corelocation() -> tuple[float, float, str] | None:
    """Try to get location via macOS CoreLocation (more accurate, OPTIONAL)."""
    if not _is_corelocation_available():
        return None

    try:
        result = subprocess.run(
            [CORELOCATION_CMD, "-j"],
            capture_output=True,
            text=True,
            timeout=15,
        )
        if result.returncode == 0:
            data = json.loads(result.stdout)
            return float(data["latitude"]), float(data["longitude"]), data.get("locality", "")
    except (subprocess.TimeoutExpired, json.JSONDecodeError, KeyError, ValueError, OSError) as e:
        logger.debug("CoreLocation lookup failed: %s", e)
    return None


def _get_location_ip() -> tuple[float, float, str] | None:
    """Get location via IP geolocation (fallback, no special dependencies)."""
    try:
        response = requests.get(IP_API_URL, timeout=5)
        response.raise_for_status()
        data = response.json()
        if data.get("status") == "success":
            return data["lat"], data["lon"], data.get("city", "Unknown")
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.debug("IP geolocation failed: %s", e)
    return None


def get_location(
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    city: str = "",
    cache_max_age: int = 600,
) -> tuple[float, float, str]:
    """
    Resolve (latitude, longitude, city).

    Tries in order:
    1. Explicit coordinates (from config)
    2. In-process cache (if fresh)
    3. CoreLocationCLI (if available)
    4. IP geolocation API
    5. Default (San Francisco)
    """
    global _cache, _cache_time

    if latitude is not None and longitude is not None:
        return latitude, longitude, city

    if _cache and (_time.time() - _cache_time) < cache_max_age:
        return _cache

    location = _get_location_corelocation() or _get_location_ip()
    if location:
        _cache = location
        _cache_time = _time.time()
        return location

    logger.info("Location lookup failed, using default %s", DEFAULT_LOCATION[2])
    return DEFAULT_LOCATION


def clear_location_cache() -> None:
    global _cache, _cache_time
    _cache = None
    _cache_time = 0.0
