"""Widget - canvas primitives, visual blocks, host interface and layout."""

from .canvas import Color, Cell, Canvas, Brush, Sprite, SPRITES, icon_for_code
from .blocks import (
    CELL_WIDTH,
    CELL_HEIGHT,
    VisualBlock,
    ConditionBlock,
    ForecastBlock,
    build_condition_block,
    build_forecast_block,
)
from .host import OverlayHost, CanvasHost, anchor_origin
from .config import OverlayConfig, WeatherConfig, DisplayConfig, CONFIG_PATH
from .composer import LayoutComposer, VERTICAL_OFFSET

__all__ = [
    # Canvas system
    "Color",
    "Cell",
    "Canvas",
    "Brush",
    "Sprite",
    "SPRITES",
    "icon_for_code",
    # Blocks
    "CELL_WIDTH",
    "CELL_HEIGHT",
    "VisualBlock",
    "ConditionBlock",
    "ForecastBlock",
    "build_condition_block",
    "build_forecast_block",
    # Host + layout
    "OverlayHost",
    "CanvasHost",
    "anchor_origin",
    "LayoutComposer",
    "VERTICAL_OFFSET",
    # Config
    "OverlayConfig",
    "WeatherConfig",
    "DisplayConfig",
    "CONFIG_PATH",
]
