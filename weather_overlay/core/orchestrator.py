"""Decides between cached and fetched weather, and sequences the fetch chain."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from .cache import RecordKind, TTLCache
from .errors import FetchError
from .state import DisplayMode, OverlayPhase

if TYPE_CHECKING:
    from ..widget.composer import LayoutComposer

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]


class FetchOrchestrator:
    """
    Per-overlay entry point, invoked by the host at each new video.

    The first invocation runs the one-time geometry setup. Every
    invocation re-checks the cache: fresh records are composed right
    away, otherwise a fetch chain is started on the event loop and
    composition happens when it completes. In forecast mode the
    forecast is fetched and persisted before current conditions are
    requested. Each fetch is tried once; a failure aborts the chain
    and leaves the display as it was.

    All calls must happen on the event loop thread, which is the host's
    serialized update path. Chains are never cancelled; a chain that
    finishes after a newer invocation still persists its records but
    does not compose.
    """

    def __init__(
        self,
        composer: LayoutComposer,
        fetch_current: Fetcher,
        fetch_forecast: Fetcher,
        cache: Optional[TTLCache] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.composer = composer
        self.state = composer.state
        self.fetch_current = fetch_current
        self.fetch_forecast = fetch_forecast
        self.cache = cache or TTLCache()
        self._loop = loop
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> list[asyncio.Task]:
        return [task for task in self._tasks if not task.done()]

    def set_content_scale(self, scale: float) -> None:
        self.composer.set_content_scale(scale)

    def setup_for_video(self, mode: DisplayMode | str) -> Optional[asyncio.Task]:
        """
        Show weather for *mode*, fetching only what the cache can't supply.

        Returns None if the overlay was composed from cache, otherwise the
        task running the fetch chain (it resolves to True once composed).
        """
        mode = DisplayMode.parse(mode)

        # Only run this once
        if not self.state.initialized:
            self.state.phase = OverlayPhase.READY
            self.composer.initialize_geometry()

        self._generation += 1
        generation = self._generation

        cached = self._read_cached(mode)
        if cached is not None:
            current, forecast = cached
            self.composer.compose(mode, current, forecast)
            return None

        logger.debug("Fetching %s weather (chain %d)", mode.value, generation)
        self.state.phase = OverlayPhase.FETCHING
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._run_chain(mode, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait(self) -> None:
        """Wait for every in-flight chain to settle."""
        while self.pending:
            await asyncio.gather(*self.pending, return_exceptions=True)

    def _read_cached(self, mode: DisplayMode) -> Optional[tuple[Any, Any]]:
        """Both records the mode needs, or None if any is absent or stale."""
        forecast = None
        if mode.needs_forecast:
            forecast = self.cache.read(RecordKind.FORECAST)
            if forecast is None:
                return None
        current = self.cache.read(RecordKind.CURRENT)
        if current is None:
            return None
        return current, forecast

    async def _run_chain(self, mode: DisplayMode, generation: int) -> bool:
        forecast = None
        try:
            if mode.needs_forecast:
                forecast = await self._fetch(self.fetch_forecast, RecordKind.FORECAST)
            current = await self._fetch(self.fetch_current, RecordKind.CURRENT)
        except FetchError as e:
            logger.warning("Weather fetch failed: %s", e)
            self._chain_failed(generation)
            return False
        except Exception:
            logger.exception("Weather fetch raised unexpectedly")
            self._chain_failed(generation)
            return False

        if generation != self._generation:
            logger.debug("Chain %d superseded by %d, not composing", generation, self._generation)
            return False

        return self.composer.compose(mode, current, forecast) is not None

    async def _fetch(self, fetcher: Fetcher, kind: RecordKind) -> Any:
        record = await fetcher()
        if record is None:
            raise FetchError(f"{kind.name.lower()} fetch returned no data")
        self.cache.write(kind, record)
        return record

    def _chain_failed(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.state.phase = OverlayPhase.COMPOSED if self.state.has_blocks else OverlayPhase.READY
