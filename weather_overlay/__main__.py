"""Terminal preview: run one overlay invocation and print the composed result.

Usage:
    python -m weather_overlay [--mode current|current_plus_forecast] [--config PATH]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .core.cache import TTLCache
from .core.state import DisplayMode, OverlayPhase
from .overlay import create_overlay, resolve_location
from .widget.config import CONFIG_PATH, OverlayConfig
from .widget.host import CanvasHost

logger = logging.getLogger("weather_overlay")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="weather-overlay", description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="JSON config file")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DisplayMode],
        help="Override the configured display mode",
    )
    parser.add_argument("--cache-dir", type=Path, help="Override the cache directory")
    parser.add_argument("--scale", type=float, help="Content scale to apply to blocks")
    parser.add_argument("--color", action="store_true", help="Render with ANSI colors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    config = OverlayConfig.load(args.config)
    if args.cache_dir:
        config.cache_dir = args.cache_dir
    mode = DisplayMode.parse(args.mode) if args.mode else config.weather.mode

    # Location lookup may shell out or hit the network
    loop = asyncio.get_running_loop()
    location = await loop.run_in_executor(None, resolve_location, config)

    host = CanvasHost(corner=config.display.corner, margin=config.display.margin)
    orchestrator = create_overlay(host, config, cache=TTLCache(config.cache_dir), location=location)
    if args.scale:
        orchestrator.set_content_scale(args.scale)

    orchestrator.setup_for_video(mode)
    await orchestrator.wait()

    if orchestrator.state.phase is not OverlayPhase.COMPOSED:
        logger.error("No weather to display")
        return 1

    print(host.render(color=args.color))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
