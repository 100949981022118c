"""Visual blocks: a current-conditions panel and a forecast strip.

Blocks are drawn once, at construction, from an already-fetched record.
Geometry is in points with a top-left anchor and y growing downward;
one canvas cell is CELL_WIDTH x CELL_HEIGHT points.
"""

from __future__ import annotations

from typing import Optional

from ..core.state import Point, Size
from ..services.weather import CurrentWeather, Forecast
from .canvas import Brush, Canvas, Color, icon_for_code

CELL_WIDTH = 8
CELL_HEIGHT = 16

ICON_WIDTH = 4
FORECAST_COLUMN_WIDTH = 6


class VisualBlock:
    """A rendered element with an intrinsic size and a settable position."""

    def __init__(self, canvas: Canvas, scale: float = 1.0, parts: Optional[list["VisualBlock"]] = None):
        self.canvas = canvas
        self.position = Point()
        self.contents_scale = scale
        self.parts: list[VisualBlock] = parts or []
        self.attached = False

    @property
    def size(self) -> Size:
        return Size(self.canvas.width * CELL_WIDTH, self.canvas.height * CELL_HEIGHT)

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    def set_contents_scale(self, scale: float) -> None:
        """Apply a content scale to this block and all of its parts."""
        self.contents_scale = scale
        for part in self.parts:
            part.set_contents_scale(scale)

    def __repr__(self) -> str:
        size = self.size
        return (f"{type(self).__name__}(size={size.width:g}x{size.height:g}, "
                f"position=({self.position.x:g}, {self.position.y:g}))")


def _format_temp(value: float) -> str:
    return f"{round(value)}°"


class ConditionBlock(VisualBlock):
    """Icon, temperature, description and city for the current conditions."""

    def __init__(self, record: CurrentWeather, scale: float = 1.0):
        self.record = record

        icon_sprite = icon_for_code(record.weather_code, record.is_day)
        icon = Canvas(ICON_WIDTH, icon_sprite.height)
        icon_sprite.stamp(icon, 0, 0)

        lines = [
            _format_temp(record.temperature),
            record.description,
            record.city or f"feels {_format_temp(record.apparent_temperature)}",
        ]
        label = Canvas(max(len(line) for line in lines), len(lines))
        Brush.text(label, 0, 0, lines[0], Color.BRIGHT_WHITE)
        Brush.text(label, 0, 1, lines[1])
        Brush.text(label, 0, 2, lines[2], Color.GRAY)

        canvas = Canvas(ICON_WIDTH + 1 + label.width, max(icon.height, label.height))
        canvas.composite(icon, 0, 0)
        canvas.composite(label, ICON_WIDTH + 1, 0)

        super().__init__(canvas, scale, parts=[VisualBlock(icon, scale), VisualBlock(label, scale)])


class ForecastBlock(VisualBlock):
    """One column per forecast day: weekday, icon, high, low and precipitation chance."""

    ROWS = 6

    def __init__(self, record: Forecast, scale: float = 1.0):
        self.record = record
        days = record.days
        canvas = Canvas(max(1, len(days)) * FORECAST_COLUMN_WIDTH, self.ROWS)

        for i, day in enumerate(days):
            x = i * FORECAST_COLUMN_WIDTH
            Brush.text_centered(canvas, 0, day.weekday, Color.WHITE, x=x, width=FORECAST_COLUMN_WIDTH)
            icon_for_code(day.weather_code).stamp(canvas, x + 1, 1)
            Brush.text_centered(canvas, 3, _format_temp(day.temp_max), Color.BRIGHT_WHITE,
                                x=x, width=FORECAST_COLUMN_WIDTH)
            Brush.text_centered(canvas, 4, _format_temp(day.temp_min), Color.GRAY,
                                x=x, width=FORECAST_COLUMN_WIDTH)
            Brush.text_centered(canvas, 5, f"{round(day.precipitation_probability)}%", Color.BLUE,
                                x=x, width=FORECAST_COLUMN_WIDTH)

        super().__init__(canvas, scale)


def build_condition_block(record: CurrentWeather, scale: float = 1.0) -> ConditionBlock:
    return ConditionBlock(record, scale)


def build_forecast_block(record: Forecast, scale: float = 1.0) -> ForecastBlock:
    return ForecastBlock(record, scale)
