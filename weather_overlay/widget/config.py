"""Overlay configuration loaded from a JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from ..core.cache import DEFAULT_CACHE_DIR
from ..core.state import DisplayMode

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "weather-overlay" / "config.json"

CORNERS = ("top_left", "top_right", "bottom_left", "bottom_right")


@dataclass
class WeatherConfig:
    """What to show and where to fetch it for."""
    mode: DisplayMode = DisplayMode.CURRENT
    latitude: Optional[float] = None  # None = detect
    longitude: Optional[float] = None
    city: str = ""
    temperature_unit: str = "fahrenheit"
    wind_speed_unit: str = "mph"
    forecast_days: int = 5

    def to_dict(self) -> dict:
        d = asdict(self)
        d["mode"] = self.mode.value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "WeatherConfig":
        known = {f for f in cls.__dataclass_fields__}
        values = {k: v for k, v in d.items() if k in known}
        if "mode" in values:
            try:
                values["mode"] = DisplayMode.parse(values["mode"])
            except ValueError:
                logger.warning("Unknown weather mode %r, using current", values["mode"])
                values["mode"] = DisplayMode.CURRENT
        return cls(**values)


@dataclass
class DisplayConfig:
    """Placement of the overlay on screen."""
    corner: str = "bottom_left"
    margin: int = 16

    @classmethod
    def from_dict(cls, d: dict) -> "DisplayConfig":
        known = {f for f in cls.__dataclass_fields__}
        config = cls(**{k: v for k, v in d.items() if k in known})
        if config.corner not in CORNERS:
            config.corner = "bottom_left"
        return config


@dataclass
class OverlayConfig:
    """Main configuration combining all sections."""
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    cache_dir: Path = DEFAULT_CACHE_DIR

    def to_dict(self) -> dict:
        return {
            "weather": self.weather.to_dict(),
            "display": asdict(self.display),
            "cache_dir": str(self.cache_dir),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "OverlayConfig":
        weather_dict = d.get("weather", {})
        # Legacy flat format: {"mode": "...", "latitude": ...}
        if not weather_dict and "mode" in d:
            weather_dict = d

        return cls(
            weather=WeatherConfig.from_dict(weather_dict),
            display=DisplayConfig.from_dict(d.get("display", {})),
            cache_dir=Path(d.get("cache_dir") or DEFAULT_CACHE_DIR).expanduser(),
        )

    def save(self, path: Path = CONFIG_PATH):
        path.parent.mkdir(parents=True, exist_ok=True)
        temp = path.with_suffix(".tmp")
        temp.write_text(json.dumps(self.to_dict(), indent=2))
        temp.replace(path)

    @classmethod
    def load(cls, path: Path = CONFIG_PATH) -> "OverlayConfig":
        try:
            if path.exists():
                return cls.from_dict(json.loads(path.read_text()))
        except (json.JSONDecodeError, TypeError, AttributeError, OSError) as e:
            logger.warning("Ignoring invalid config %s: %s", path, e)
        return cls()
