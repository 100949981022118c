"""File-based record cache with a modification-time TTL."""

from __future__ import annotations

import json
import logging
import math
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from .errors import CacheReadError, CacheWriteError, report_defect

logger = logging.getLogger(__name__)

# Records older than this (by file mtime) are treated as absent
CACHE_TTL = 60 * 15

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "weather-overlay"


class RecordKind(Enum):
    """Kinds of cached records. Value is the file name under the cache dir."""
    CURRENT = "Weather.json"
    FORECAST = "Forecast.json"

    @property
    def filename(self) -> str:
        return self.value


Decoder = Callable[[dict], Any]


def _default_decoders() -> dict[RecordKind, Decoder]:
    from ..services.weather import CurrentWeather, Forecast
    return {
        RecordKind.CURRENT: CurrentWeather.from_dict,
        RecordKind.FORECAST: Forecast.from_dict,
    }


class TTLCache:
    """
    Reads and writes one JSON record per kind under a fixed directory.

    Freshness comes only from the file's modification time, never from
    the payload. Both ``read`` and ``write`` fail soft: a reader only ever
    sees a record or ``None``, and a failed write leaves the previous
    file in place.
    """

    def __init__(
        self,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        ttl: float = CACHE_TTL,
        decoders: Optional[dict[RecordKind, Decoder]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cache_dir = Path(cache_dir)
        self.ttl = ttl
        self._decoders = decoders
        self._clock = clock

    @property
    def decoders(self) -> dict[RecordKind, Decoder]:
        if self._decoders is None:
            self._decoders = _default_decoders()
        return self._decoders

    def path_for(self, kind: RecordKind) -> Path:
        return self.cache_dir / kind.filename

    def age(self, kind: RecordKind) -> Optional[float]:
        """Seconds since the record was last written, or None if unknown."""
        try:
            return self._clock() - self.path_for(kind).stat().st_mtime
        except OSError:
            return None

    def is_fresh(self, kind: RecordKind) -> bool:
        age = self.age(kind)
        return age is not None and age <= self.ttl

    def read(self, kind: RecordKind) -> Optional[Any]:
        """
        Return the cached record for *kind*, or None if absent or stale.

        Missing and stale files are routine. An unreadable mtime or an
        undecodable payload is reported as a defect, but still yields None.
        """
        path = self.path_for(kind)
        if not path.exists():
            logger.debug("No cached %s record at %s", kind.name, path)
            return None

        try:
            modified = path.stat().st_mtime
        except OSError as e:
            report_defect("Couldn't get modification time of %s: %s", path, e)
            return None

        age = self._clock() - modified
        if age > self.ttl:
            logger.debug("Cached %s record is stale (%.0fs old)", kind.name, age)
            return None

        try:
            return self._load(kind, path)
        except CacheReadError as e:
            report_defect("Error decoding cached %s record: %s", kind.name, e)
            return None

    def write(self, kind: RecordKind, value: Any) -> bool:
        """
        Persist *value* for *kind*. Returns True if the file was replaced.

        ``None`` is never stored. Encode and I/O failures are reported and
        dropped, leaving the previous file untouched.
        """
        if value is None:
            return False
        try:
            self._store(kind, value)
        except CacheWriteError as e:
            report_defect("Error encoding %s record: %s", kind.name, e)
            return False
        logger.debug("Cached %s record at %s", kind.name, self.path_for(kind))
        return True

    def _load(self, kind: RecordKind, path: Path) -> Any:
        try:
            data = json.loads(path.read_bytes(), parse_constant=_reject_constant, parse_float=_finite_float)
            return self.decoders[kind](data)
        except (OSError, ValueError, KeyError, TypeError, OverflowError) as e:
            raise CacheReadError(f"{path.name}: {e}") from e

    def _store(self, kind: RecordKind, value: Any) -> None:
        payload = value.to_dict() if hasattr(value, "to_dict") else value
        try:
            text = json.dumps(payload, indent=2, sort_keys=True, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise CacheWriteError(f"{kind.filename}: {e}") from e

        path = self.path_for(kind)
        temp_file = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write atomically
            temp_file.write_text(text)
            temp_file.replace(path)
        except OSError as e:
            temp_file.unlink(missing_ok=True)
            raise CacheWriteError(f"{path}: {e}") from e


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not valid JSON and can't be rendered
    raise ValueError(f"non-finite number {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number {text}")
    return value
