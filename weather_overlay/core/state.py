"""Per-overlay lifecycle state: display mode, setup phase, blocks and geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..widget.blocks import VisualBlock


class DisplayMode(Enum):
    """Which records are required before composition, and how blocks are laid out."""
    CURRENT = "current"
    CURRENT_PLUS_FORECAST = "current_plus_forecast"

    @classmethod
    def parse(cls, value: "DisplayMode | str") -> "DisplayMode":
        if isinstance(value, cls):
            return value
        # Legacy: "forecast" -> current conditions plus forecast strip
        if value == "forecast":
            return cls.CURRENT_PLUS_FORECAST
        return cls(value)

    @property
    def needs_forecast(self) -> bool:
        return self is DisplayMode.CURRENT_PLUS_FORECAST


class OverlayPhase(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FETCHING = "fetching"
    COMPOSED = "composed"


@dataclass
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass
class OverlayState:
    """
    Mutable state owned by one overlay instance.

    Only touched from the host's serialized update path (the event loop),
    so it carries no lock.
    """
    phase: OverlayPhase = OverlayPhase.UNINITIALIZED
    scale: Optional[float] = None
    current_block: Optional["VisualBlock"] = None
    forecast_block: Optional["VisualBlock"] = None
    size: Size = field(default_factory=Size)

    @property
    def initialized(self) -> bool:
        return self.phase is not OverlayPhase.UNINITIALIZED

    @property
    def has_blocks(self) -> bool:
        return self.current_block is not None
