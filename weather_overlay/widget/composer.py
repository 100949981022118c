"""Builds and positions the overlay's condition and forecast blocks."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..core.errors import CompositionPreconditionError, report_defect
from ..core.state import DisplayMode, OverlayPhase, OverlayState, Point, Size
from .blocks import VisualBlock, build_condition_block, build_forecast_block
from .host import OverlayHost

logger = logging.getLogger(__name__)

# Blocks sit this many points below the overlay's top edge
VERTICAL_OFFSET = 10

# Geometry before anything has been composed
INITIAL_SIZE = Size(100, 1)

FADE_KEY = "weatherfade"

BlockBuilder = Callable[[Any, float], VisualBlock]


class LayoutComposer:
    """
    Rebuilds the overlay's blocks from weather records and sizes the container.

    Every composition is a full rebuild: existing blocks are detached
    before new ones are built. Blocks are anchored at their top-left
    corner, with y growing downward.
    """

    def __init__(
        self,
        host: OverlayHost,
        state: Optional[OverlayState] = None,
        build_current: BlockBuilder = build_condition_block,
        build_forecast: BlockBuilder = build_forecast_block,
    ):
        self.host = host
        self.state = state or OverlayState()
        self.build_current = build_current
        self.build_forecast = build_forecast

    def initialize_geometry(self) -> None:
        """One-time frame setup, run by the orchestrator's setup gate."""
        self._set_size(Size(INITIAL_SIZE.width, INITIAL_SIZE.height))
        self.host.update()

    def set_content_scale(self, scale: float) -> None:
        """Propagate *scale* to existing blocks and remember it for future ones."""
        for block in (self.state.current_block, self.state.forecast_block):
            if block is not None:
                block.set_contents_scale(scale)
        self.state.scale = scale

    def compose(
        self,
        mode: DisplayMode,
        current: Any,
        forecast: Any = None,
    ) -> Optional[Size]:
        """
        Replace the blocks with ones built from *current* (and *forecast*).

        Returns the new container size, or None when the records the mode
        needs are missing (a defect; nothing is touched in that case).
        """
        mode = DisplayMode.parse(mode)
        try:
            _check_records(mode, current, forecast)
        except CompositionPreconditionError as e:
            report_defect("Cannot compose overlay: %s", e)
            return None

        self._discard_blocks()

        current_block = self._build(self.build_current, current)

        if mode is DisplayMode.CURRENT:
            current_block.position = Point(0, VERTICAL_OFFSET)
            size = Size(current_block.width, current_block.height)
            self._attach(current_block, None)
        else:
            forecast_block = self._build(self.build_forecast, forecast)
            forecast_block.position = Point(current_block.width, VERTICAL_OFFSET)
            # Bottom-align current with the (taller) forecast strip
            current_block.position = Point(
                0, forecast_block.height - current_block.height + VERTICAL_OFFSET
            )
            size = Size(current_block.width + forecast_block.width, forecast_block.height)
            self._attach(current_block, forecast_block)

        self._set_size(size)
        self.state.phase = OverlayPhase.COMPOSED
        logger.debug("Composed %s overlay at %gx%g", mode.value, size.width, size.height)

        self.host.update(redraw=True)
        self.host.request_fade_in(FADE_KEY)
        return size

    def _build(self, builder: BlockBuilder, record: Any) -> VisualBlock:
        scale = self.state.scale if self.state.scale is not None else self.host.contents_scale
        block = builder(record, scale)
        if self.state.scale is not None:
            block.set_contents_scale(self.state.scale)
        return block

    def _attach(self, current_block: VisualBlock, forecast_block: Optional[VisualBlock]) -> None:
        self.state.current_block = current_block
        self.host.add_block(current_block)
        self.state.forecast_block = forecast_block
        if forecast_block is not None:
            self.host.add_block(forecast_block)

    def _discard_blocks(self) -> None:
        if self.state.current_block is not None:
            self.host.remove_block(self.state.current_block)
            self.state.current_block = None
        if self.state.forecast_block is not None:
            self.host.remove_block(self.state.forecast_block)
            self.state.forecast_block = None

    def _set_size(self, size: Size) -> None:
        self.state.size = size
        self.host.set_frame_size(size)


def _check_records(mode: DisplayMode, current: Any, forecast: Any) -> None:
    if current is None:
        raise CompositionPreconditionError(f"{mode.value} mode needs a current conditions record")
    if mode.needs_forecast and forecast is None:
        raise CompositionPreconditionError(f"{mode.value} mode needs a forecast record")
