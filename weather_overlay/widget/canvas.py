"""
Character-grid canvas and brushes used to draw weather blocks.

Core design:
- Canvas: 2D grid of (char, color) cells
- Brush: Functions that paint onto a canvas
- Sprite: Pre-built weather icons
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Colors
# =============================================================================

class Color(Enum):
    """ANSI 256-color codes for canvas cells. Value is the color number."""
    RESET = -1

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    WHITE = 7

    GRAY = 8
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_WHITE = 15

    def ansi_fg(self) -> str:
        """Get ANSI foreground escape code."""
        if self == Color.RESET:
            return "\033[0m"
        return f"\033[38;5;{self.value}m"


# =============================================================================
# Cell and Canvas
# =============================================================================

@dataclass
class Cell:
    """A single canvas cell with character and color."""
    char: str = " "
    fg: Color = Color.WHITE

    def render(self) -> str:
        """Render cell to ANSI string."""
        return f"{self.fg.ansi_fg()}{self.char}{Color.RESET.ansi_fg()}"


class Canvas:
    """2D grid of cells for drawing."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: list[list[Cell]] = [
            [Cell() for _ in range(width)] for _ in range(height)
        ]

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        x, y = pos
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[y][x]
        return Cell()  # Out of bounds returns empty cell

    def put(self, x: int, y: int, char: str, fg: Color = Color.WHITE):
        """Put a single character at position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y][x] = Cell(char, fg)

    def composite(self, other: "Canvas", ox: int, oy: int, transparent: str = " "):
        """Composite another canvas onto this one. Transparent char is skipped."""
        for y in range(other.height):
            for x in range(other.width):
                cell = other[x, y]
                if cell.char != transparent:
                    self.put(ox + x, oy + y, cell.char, cell.fg)

    def render(self) -> str:
        """Render canvas to ANSI string."""
        return "\n".join("".join(cell.render() for cell in row) for row in self.cells)

    def render_plain(self) -> str:
        """Render canvas without colors (plain text)."""
        return "\n".join("".join(cell.char for cell in row) for row in self.cells)


# =============================================================================
# Brushes - Drawing Primitives
# =============================================================================

class Brush:
    """Collection of drawing primitives (static methods that paint onto canvas)."""

    @staticmethod
    def text(canvas: Canvas, x: int, y: int, text: str, color: Color = Color.WHITE):
        """Draw text horizontally."""
        for i, char in enumerate(text):
            canvas.put(x + i, y, char, color)

    @staticmethod
    def text_centered(canvas: Canvas, y: int, text: str, color: Color = Color.WHITE,
                      x: int = 0, width: Optional[int] = None):
        """Draw text centered within [x, x + width) (defaults to the full canvas)."""
        span = canvas.width - x if width is None else width
        Brush.text(canvas, x + max(0, (span - len(text)) // 2), y, text, color)


# =============================================================================
# Sprites - Weather Icons
# =============================================================================

@dataclass
class Sprite:
    """A pre-built character pattern that can be stamped onto a canvas."""
    pattern: list[str]
    color: Color = Color.WHITE
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self):
        self.height = len(self.pattern)
        self.width = max(len(line) for line in self.pattern) if self.pattern else 0

    def stamp(self, canvas: Canvas, x: int, y: int, transparent: str = " "):
        """Stamp sprite onto canvas at position."""
        for dy, line in enumerate(self.pattern):
            for dx, char in enumerate(line):
                if char != transparent:
                    canvas.put(x + dx, y + dy, char, self.color)


# Icons are 2 rows x 4 columns so blocks can lay them out on a fixed grid
SPRITES = {
    "clear": Sprite([" \\|/", " -O-"], Color.BRIGHT_YELLOW),
    "night": Sprite(["  _ ", " (  "], Color.BRIGHT_WHITE),
    "cloudy": Sprite([" .-.", "(__)"], Color.GRAY),
    "fog": Sprite(["_-_-", "-_-_"], Color.GRAY),
    "rain": Sprite([" .-.", " ///"], Color.BRIGHT_BLUE),
    "snow": Sprite([" .-.", " * *"], Color.BRIGHT_WHITE),
    "storm": Sprite([" .-.", " /_/"], Color.YELLOW),
    "unknown": Sprite(["  ? ", "    "], Color.GRAY),
}


def icon_for_code(weather_code: int, is_day: bool = True) -> Sprite:
    """Pick a weather icon for a WMO weather code."""
    if weather_code in (0, 1):
        return SPRITES["clear"] if is_day else SPRITES["night"]
    if weather_code in (2, 3):
        return SPRITES["cloudy"]
    if weather_code in (45, 48):
        return SPRITES["fog"]
    if 51 <= weather_code <= 67 or 80 <= weather_code <= 82:
        return SPRITES["rain"]
    if 71 <= weather_code <= 77 or weather_code in (85, 86):
        return SPRITES["snow"]
    if weather_code in (95, 96, 99):
        return SPRITES["storm"]
    return SPRITES["unknown"]
