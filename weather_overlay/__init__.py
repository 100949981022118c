"""Weather overlay - TTL-cached weather fetches composed into an on-screen block."""

from .core import (
    CACHE_TTL,
    DisplayMode,
    FetchOrchestrator,
    OverlayState,
    RecordKind,
    TTLCache,
)
from .overlay import create_overlay
from .widget import CanvasHost, LayoutComposer, OverlayConfig

__version__ = "0.1.0"

__all__ = [
    "CACHE_TTL",
    "DisplayMode",
    "FetchOrchestrator",
    "OverlayState",
    "RecordKind",
    "TTLCache",
    "create_overlay",
    "CanvasHost",
    "LayoutComposer",
    "OverlayConfig",
]
