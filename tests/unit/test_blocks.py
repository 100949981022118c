"""Tests for the condition and forecast blocks."""

from weather_overlay.core.state import Point, Size
from weather_overlay.services.weather import CurrentWeather, Forecast, ForecastDay
from weather_overlay.widget.blocks import (
    CELL_HEIGHT,
    CELL_WIDTH,
    ConditionBlock,
    ForecastBlock,
    VisualBlock,
    build_condition_block,
    build_forecast_block,
)
from weather_overlay.widget.canvas import Canvas


class TestVisualBlock:
    def test_size_from_canvas(self):
        block = VisualBlock(Canvas(10, 3))
        assert block.size == Size(10 * CELL_WIDTH, 3 * CELL_HEIGHT)
        assert block.width == 80
        assert block.height == 48

    def test_defaults(self):
        block = VisualBlock(Canvas(1, 1))
        assert block.position == Point(0, 0)
        assert block.contents_scale == 1.0
        assert block.parts == []
        assert block.attached is False

    def test_scale_reaches_nested_parts(self):
        leaf = VisualBlock(Canvas(1, 1))
        middle = VisualBlock(Canvas(1, 1), parts=[leaf])
        root = VisualBlock(Canvas(1, 1), parts=[middle])

        root.set_contents_scale(2.0)

        assert (root.contents_scale, middle.contents_scale, leaf.contents_scale) == (2.0, 2.0, 2.0)


class TestConditionBlock:
    def test_renders_temperature_description_city(self, current_record):
        block = ConditionBlock(current_record)
        text = block.canvas.render_plain()
        assert "65°" in text
        assert "Overcast" in text
        assert "San Francisco" in text

    def test_falls_back_to_feels_like_without_city(self, current_record):
        current_record.city = ""
        text = ConditionBlock(current_record).canvas.render_plain()
        assert "feels 63°" in text

    def test_three_rows(self, current_record):
        block = ConditionBlock(current_record)
        assert block.canvas.height == 3
        assert block.height == 3 * CELL_HEIGHT

    def test_width_fits_longest_line(self, current_record):
        block = ConditionBlock(current_record)
        # icon (4) + gap (1) + "San Francisco" (13)
        assert block.canvas.width == 18

    def test_has_icon_and_label_parts(self, current_record):
        block = ConditionBlock(current_record, scale=2.0)
        assert len(block.parts) == 2
        assert all(part.contents_scale == 2.0 for part in block.parts)

    def test_builder(self, current_record):
        block = build_condition_block(current_record, 1.5)
        assert isinstance(block, ConditionBlock)
        assert block.contents_scale == 1.5
        assert block.record is current_record


class TestForecastBlock:
    def test_one_column_per_day(self, forecast_record):
        block = ForecastBlock(forecast_record)
        assert block.canvas.width == 3 * 6
        assert block.canvas.height == ForecastBlock.ROWS

    def test_taller_than_condition_block(self, current_record, forecast_record):
        assert ForecastBlock(forecast_record).height > ConditionBlock(current_record).height

    def test_renders_weekdays_and_temps(self, forecast_record):
        text = ForecastBlock(forecast_record).canvas.render_plain()
        # 2026-10-19 is a Monday
        assert "Mon" in text
        assert "Tue" in text
        assert "72°" in text
        assert "52°" in text
        assert "60%" in text

    def test_empty_forecast_still_has_size(self):
        block = ForecastBlock(Forecast(days=[]))
        assert block.width > 0

    def test_builder(self, forecast_record):
        block = build_forecast_block(forecast_record, 2.0)
        assert isinstance(block, ForecastBlock)
        assert block.contents_scale == 2.0


class TestRecordsFromBlocksDontLeak:
    def test_blocks_do_not_mutate_records(self):
        record = CurrentWeather(temperature=70.4, weather_code=0, description="Clear", wind_speed=3.0)
        before = record.to_dict()
        ConditionBlock(record)
        assert record.to_dict() == before

    def test_forecast_day_weekday(self):
        assert ForecastDay("2026-10-24", 0, "Clear", 1.0, 0.0).weekday == "Sat"
