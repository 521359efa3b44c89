"""Editing session state.

An EditSession ties one document to the state that only makes sense while
it is being edited: the focused block, the selection anchor, layout
settings, key repeat timers and the caret blink clock. Every navigation,
selection and edit function takes the session explicitly, so two documents
never share selection state.
"""

from __future__ import annotations

from typing import Optional

from .constants import EditorConstants
from .document import Block, Document, InvalidReference
from .layout import LineWrapIndex
from .metrics import FONT_METRICS, TextMetrics, get_font_metrics
from .repeat import RepeatTimers
from .selection import Anchor, clear_selection
from .settings import EditorSettings


class EditSession:
    """Single-writer editing state for one document."""

    def __init__(self, document: Optional[Document] = None,
                 settings: Optional[EditorSettings] = None,
                 metrics: Optional[TextMetrics] = None):
        self.document = document if document is not None else Document()
        self.settings = settings or EditorSettings()
        self.metrics: TextMetrics = (
            metrics
            or get_font_metrics(self.settings.font_name)
            or FONT_METRICS[EditorConstants.DEFAULT_FONT_NAME]
        )
        self._focus_id: Optional[int] = None
        self._anchor: Optional[Anchor] = None
        self.timers = RepeatTimers()
        self.last_action_time = 0.0

    # --- Focus ---

    @property
    def focus(self) -> Optional[Block]:
        if self._focus_id is None:
            return None
        return self.document.get(self._focus_id)

    @focus.setter
    def focus(self, block: Optional[Block]) -> None:
        if block is not None and block not in self.document:
            raise InvalidReference(f"block {block.id} is not in this document")
        self._focus_id = block.id if block is not None else None

    # --- Anchor ---

    @property
    def anchor(self) -> Optional[Anchor]:
        # An anchor on a block that has since been removed is no anchor
        if self._anchor is not None and self._anchor.block not in self.document:
            self._anchor = None
        return self._anchor

    def set_anchor(self, block: Block, index: int) -> Anchor:
        if block not in self.document:
            raise InvalidReference(f"block {block.id} is not in this document")
        self._anchor = Anchor(block, min(max(index, 0), len(block)))
        return self._anchor

    def clear_anchor(self) -> None:
        self._anchor = None

    def clear_selection(self) -> None:
        """Drop the anchor and every block's selected range."""
        self._anchor = None
        clear_selection(self.document)

    # --- Layout ---

    def layout(self, block: Block) -> LineWrapIndex:
        return LineWrapIndex(block.text, self.settings.max_width,
                             self.metrics, self.settings.font_size)

    # --- Caret blink ---

    def touch(self, now: float) -> None:
        """Record user activity, which keeps the caret solid for a moment."""
        self.last_action_time = now

    def cursor_visible(self, now: float) -> bool:
        if now - self.last_action_time < EditorConstants.CURSOR_SOLID_AFTER_ACTION:
            return True
        return int(now * EditorConstants.CURSOR_BLINK_RATE) % 2 == 0
