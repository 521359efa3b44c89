"""Glyph width measurement for the wrap layout.

A text metrics function takes a single character and a font size and
returns the advance width of that character. Newlines never take space.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import blessed

TextMetrics = Callable[[str, float], float]


@dataclass(frozen=True)
class FontMetrics:
    """Metrics for a fixed-pitch font.

    Attributes:
        name: Display name of the font
        advance: Width of every glyph per unit of font size
    """
    name: str
    advance: float

    def __call__(self, char: str, font_size: float) -> float:
        if char == "\n":
            return 0.0
        return self.advance * font_size

    def cell_width(self, font_size: float) -> float:
        """Width of one glyph at the given size."""
        return self.advance * font_size


class TerminalMetrics:
    """Measure characters in terminal cells using Blessed.

    Wide characters (East Asian, emoji) take two cells, combining marks none.
    The font size is ignored; cell_width scales the result.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, cell_width: float = 1.0):
        self.term = terminal or blessed.Terminal(force_styling=None)
        self.cell_width = cell_width

    def __call__(self, char: str, font_size: float) -> float:
        if char == "\n":
            return 0.0
        return max(self.term.length(char), 0) * self.cell_width


# Pre-defined font metrics
FONT_METRICS: Dict[str, FontMetrics] = {
    "Monospace": FontMetrics(name="Monospace", advance=0.5),
    "Wide Monospace": FontMetrics(name="Wide Monospace", advance=0.6),
}


def get_font_metrics(font_name: str) -> Optional[FontMetrics]:
    """Get font metrics by name.

    Args:
        font_name: Name of the font

    Returns:
        FontMetrics if found, None otherwise
    """
    return FONT_METRICS.get(font_name)
