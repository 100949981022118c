"""Core - overlay state, error taxonomy, TTL cache and fetch orchestration."""

from .state import DisplayMode, OverlayPhase, OverlayState, Point, Size
from .errors import (
    OverlayError,
    CacheReadError,
    CacheWriteError,
    FetchError,
    CompositionPreconditionError,
    report_defect,
)
from .cache import CACHE_TTL, DEFAULT_CACHE_DIR, RecordKind, TTLCache
from .orchestrator import FetchOrchestrator

__all__ = [
    # State
    "DisplayMode",
    "OverlayPhase",
    "OverlayState",
    "Point",
    "Size",
    # Errors
    "OverlayError",
    "CacheReadError",
    "CacheWriteError",
    "FetchError",
    "CompositionPreconditionError",
    "report_defect",
    # Cache
    "CACHE_TTL",
    "DEFAULT_CACHE_DIR",
    "RecordKind",
    "TTLCache",
    # Orchestration
    "FetchOrchestrator",
]
