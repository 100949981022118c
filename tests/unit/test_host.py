"""Tests for the in-memory canvas host."""

from weather_overlay.core.state import DisplayMode, Point, Size
from weather_overlay.widget.blocks import VisualBlock
from weather_overlay.widget.canvas import Canvas
from weather_overlay.widget.host import CanvasHost, anchor_origin


def _block(cols, rows, char="#"):
    canvas = Canvas(cols, rows)
    for y in range(rows):
        for x in range(cols):
            canvas.put(x, y, char)
    return VisualBlock(canvas)


class TestAnchorOrigin:
    def test_top_left(self):
        assert anchor_origin("top_left", Size(100, 50), Size(1920, 1080), 16) == Point(16, 16)

    def test_bottom_right(self):
        origin = anchor_origin("bottom_right", Size(100, 50), Size(1920, 1080), 16)
        assert origin == Point(1920 - 100 - 16, 1080 - 50 - 16)

    def test_bottom_left(self):
        assert anchor_origin("bottom_left", Size(100, 50), Size(800, 600)) == Point(0, 550)


class TestCanvasHost:
    def test_add_and_remove_blocks(self):
        host = CanvasHost()
        block = _block(2, 1)
        host.add_block(block)
        assert block.attached
        host.remove_block(block)
        assert not block.attached
        assert host.blocks == []

    def test_remove_unknown_block_is_harmless(self):
        host = CanvasHost()
        host.remove_block(_block(1, 1))
        assert host.blocks == []

    def test_update_counts_redraws(self):
        host = CanvasHost()
        host.update()
        host.update(redraw=True)
        assert host.updates == 2
        assert host.redraws == 1

    def test_update_repins_frame_to_corner(self):
        host = CanvasHost(screen_size=Size(800, 600), corner="bottom_right", margin=10)
        host.set_frame_size(Size(200, 100))
        host.update()
        assert host.origin == Point(590, 490)

    def test_update_without_screen_keeps_origin(self):
        host = CanvasHost()
        host.set_frame_size(Size(200, 100))
        host.update()
        assert host.origin == Point(0, 0)

    def test_fade_in_recorded(self):
        host = CanvasHost()
        host.request_fade_in("weatherfade")
        assert host.fade_ins == ["weatherfade"]

    def test_render_places_blocks_by_position(self):
        host = CanvasHost()
        left = _block(2, 1, "L")
        right = _block(2, 2, "R")
        left.position = Point(0, 16)
        right.position = Point(16, 0)
        host.add_block(left)
        host.add_block(right)

        assert host.render() == "  RR\nLLRR"

    def test_render_composed_forecast_overlay(self, composer, host, current_record, forecast_record):
        composer.compose(DisplayMode.CURRENT_PLUS_FORECAST, current_record, forecast_record)
        lines = host.render().split("\n")

        # Current block bottom-aligns with the forecast strip
        assert "San Francisco" in lines[-1]
        assert "Mon" in lines[1]
        assert "65°" in lines[-3]
