"""Host interface the overlay draws into, plus an in-memory canvas host."""

from __future__ import annotations

import logging
import math
from typing import Optional, Protocol

from ..core.state import Point, Size
from .blocks import CELL_HEIGHT, CELL_WIDTH, VisualBlock
from .canvas import Canvas

logger = logging.getLogger(__name__)


class OverlayHost(Protocol):
    """What the composer needs from the compositing/animation system."""

    contents_scale: float

    def add_block(self, block: VisualBlock) -> None:
        ...

    def remove_block(self, block: VisualBlock) -> None:
        ...

    def set_frame_size(self, size: Size) -> None:
        ...

    def update(self, redraw: bool = False) -> None:
        """Re-anchor the overlay (and repaint it when *redraw* is set)."""
        ...

    def request_fade_in(self, key: str) -> None:
        ...


def anchor_origin(corner: str, frame: Size, screen: Size, margin: float = 0) -> Point:
    """Top-left origin that pins *frame* into *corner* of *screen* (y down)."""
    left = corner.endswith("left")
    top = corner.startswith("top")
    x = margin if left else screen.width - frame.width - margin
    y = margin if top else screen.height - frame.height - margin
    return Point(x, y)


class CanvasHost:
    """
    Host that keeps attached blocks in memory and renders them to a Canvas.

    Used by the CLI preview and by tests to observe what the composer did.
    When a screen size is given, ``update()`` re-pins the frame to its corner.
    """

    def __init__(
        self,
        contents_scale: float = 1.0,
        screen_size: Optional[Size] = None,
        corner: str = "bottom_left",
        margin: float = 0,
    ):
        self.contents_scale = contents_scale
        self.screen_size = screen_size
        self.corner = corner
        self.margin = margin
        self.origin = Point()
        self.blocks: list[VisualBlock] = []
        self.frame_size = Size()
        self.updates = 0
        self.redraws = 0
        self.fade_ins: list[str] = []

    def add_block(self, block: VisualBlock) -> None:
        block.attached = True
        self.blocks.append(block)

    def remove_block(self, block: VisualBlock) -> None:
        if block in self.blocks:
            self.blocks.remove(block)
        block.attached = False

    def set_frame_size(self, size: Size) -> None:
        self.frame_size = Size(size.width, size.height)

    def update(self, redraw: bool = False) -> None:
        self.updates += 1
        if self.screen_size is not None:
            self.origin = anchor_origin(self.corner, self.frame_size, self.screen_size, self.margin)
        if redraw:
            self.redraws += 1

    def request_fade_in(self, key: str) -> None:
        logger.debug("Fade-in requested (%s)", key)
        self.fade_ins.append(key)

    def to_canvas(self) -> Canvas:
        """Composite attached blocks at their positions (origin top-left)."""
        right = max([self.frame_size.width] + [b.position.x + b.width for b in self.blocks])
        bottom = max([self.frame_size.height] + [b.position.y + b.height for b in self.blocks])
        canvas = Canvas(math.ceil(right / CELL_WIDTH), math.ceil(bottom / CELL_HEIGHT))
        for block in self.blocks:
            col = round(block.position.x / CELL_WIDTH)
            row = round(block.position.y / CELL_HEIGHT)
            canvas.composite(block.canvas, col, row)
        return canvas

    def render(self, color: bool = False) -> str:
        canvas = self.to_canvas()
        return canvas.render() if color else canvas.render_plain()
