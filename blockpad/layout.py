"""Greedy line wrapping of block text into visual lines.

Every character offset of a block (including the end of the text) maps to
a visual (line, x) position. The position of offset i is the one observed
before character i is placed, which is where a caret in front of it sits.
"""

from typing import NamedTuple, Optional

from .constants import EditorConstants
from .document import Selection
from .metrics import FONT_METRICS, TextMetrics


class VisualPosition(NamedTuple):
    line: int
    x: float


class Glyph(NamedTuple):
    """A character as placed by the wrap."""
    index: int
    char: str
    line: int
    x: float
    width: float


class HighlightSpan(NamedTuple):
    """Rectangle covering selected text on one visual line."""
    line: int
    x: float
    width: float


def _default_metrics() -> TextMetrics:
    return FONT_METRICS[EditorConstants.DEFAULT_FONT_NAME]


def wrap_text(text: str, max_width: float, measure: TextMetrics,
              font_size: float = EditorConstants.FONT_SIZE) -> tuple[list[VisualPosition], list[Glyph]]:
    """Wrap text greedily.

    A newline is a forced break of zero width. Any other character that
    would end past max_width (strictly) starts a new line first. Every
    visible character advances x by its width plus the character gap.

    Returns (positions, glyphs) where positions has len(text) + 1 entries
    and glyphs has one entry per character.
    """
    positions: list[VisualPosition] = []
    glyphs: list[Glyph] = []
    line = 0
    x = 0.0
    for i, char in enumerate(text):
        positions.append(VisualPosition(line, x))
        if char == "\n":
            glyphs.append(Glyph(i, char, line, x, 0.0))
            line += 1
            x = 0.0
            continue
        width = measure(char, font_size)
        if x + width > max_width:
            line += 1
            x = 0.0
        glyphs.append(Glyph(i, char, line, x, width))
        x += width + EditorConstants.CHAR_GAP
    positions.append(VisualPosition(line, x))
    return positions, glyphs


class LineWrapIndex:
    """Two-way mapping between character offsets and visual positions."""

    def __init__(self, text: str, max_width: float = EditorConstants.MAX_WIDTH,
                 measure: Optional[TextMetrics] = None,
                 font_size: float = EditorConstants.FONT_SIZE):
        self.text = str(text)
        self.max_width = max_width
        self.font_size = font_size
        self._positions, self._glyphs = wrap_text(
            self.text, max_width, measure or _default_metrics(), font_size)

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return self._positions[-1].line + 1

    @property
    def last_line(self) -> int:
        return self._positions[-1].line

    def position(self, index: int) -> VisualPosition:
        if not 0 <= index < len(self._positions):
            raise IndexError(f"offset {index} outside text of length {len(self.text)}")
        return self._positions[index]

    def line_of(self, index: int) -> int:
        return self.position(index).line

    def x_of(self, index: int) -> float:
        return self.position(index).x

    def caret(self, index: int) -> VisualPosition:
        """Where the caret is drawn for a cursor at index."""
        return self.position(index)

    def glyphs(self) -> list[Glyph]:
        return list(self._glyphs)

    def line_ranges(self) -> list[tuple[int, int]]:
        """Offsets [start, end) of the characters placed on each visual line."""
        ranges = [[None, None] for _ in range(self.line_count)]
        for glyph in self._glyphs:
            span = ranges[glyph.line]
            if span[0] is None:
                span[0] = glyph.index
            span[1] = glyph.index + 1
        result = []
        previous_end = 0
        for start, end in ranges:
            if start is None:
                # Line without characters (after a trailing newline)
                result.append((previous_end, previous_end))
            else:
                result.append((start, end))
                previous_end = end
        return result

    def locate(self, line: int, desired_x: float) -> int:
        """Offset on the given visual line nearest to desired_x.

        Ties keep the leftmost offset. A line below the text maps to the
        end of the text, a line above it to the start.
        """
        if line < 0:
            return 0
        best_index: Optional[int] = None
        min_dist = float("inf")
        for i, pos in enumerate(self._positions):
            if pos.line == line:
                dist = abs(desired_x - pos.x)
                if dist < min_dist:
                    min_dist = dist
                    best_index = i
            elif pos.line > line:
                break
        if best_index is None:
            return len(self.text)
        return best_index

    def hit_test(self, local_x: float, local_y: float,
                 line_height: float = EditorConstants.LINE_HEIGHT) -> int:
        """Offset nearest to a point relative to the block's text origin.

        The point selects the visual line whose band contains local_y; a
        point below the last line selects the end of the text. A point left
        of the text (local_x < 0) snaps to the start of the line.
        """
        best_index = 0
        min_dist = float("inf")
        end = len(self._positions) - 1
        in_margin = local_x < 0
        for i, pos in enumerate(self._positions):
            top = pos.line * line_height
            bottom = top + line_height
            on_line = top <= local_y < bottom
            if i == end and local_y >= bottom:
                on_line = True
            if not on_line:
                continue
            if in_margin and pos.x == 0:
                return i
            dist = abs(local_x - pos.x)
            if dist < min_dist:
                min_dist = dist
                best_index = i
        return best_index

    def highlight_spans(self, selection: Optional[Selection]) -> list[HighlightSpan]:
        """Rectangles to paint behind the selected part of the text."""
        if selection is None:
            return []
        if not self.text:
            return [HighlightSpan(0, 0.0, EditorConstants.EMPTY_BLOCK_HIGHLIGHT_WIDTH)]
        spans = []
        for glyph in self._glyphs[selection.start:selection.end]:
            if glyph.char == "\n":
                width = EditorConstants.NEWLINE_HIGHLIGHT_WIDTH
            else:
                width = glyph.width + EditorConstants.CHAR_GAP
            spans.append(HighlightSpan(glyph.line, glyph.x, width))
        return spans
