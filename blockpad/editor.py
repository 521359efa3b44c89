"""Editor controller.

The Editor is the entry point for the UI layer. Each step the UI hands it
the key events and pointer positions it observed, together with the
current time; the Editor gates auto-repeat, dispatches commands and maps
pointer coordinates to blocks and character offsets. It never draws and
never polls devices.
"""

from dataclasses import dataclass
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .document import Block, Document
from .keyboard import KeyEvent, KeyType, parse_key
from .selection import update_selection_range
from .session import EditSession
from .settings import EditorSettings, SettingsPersistence, get_persistence


@dataclass(frozen=True)
class BlockFrame:
    """Vertical extent of a block on screen."""
    block: Block
    top: float
    height: float
    line_count: int

    @property
    def text_top(self) -> float:
        return self.top + EditorConstants.BLOCK_PADDING

    @property
    def bottom(self) -> float:
        """Bottom of the block's hit area, which includes the gap below it."""
        return self.top + self.height + EditorConstants.BLOCK_GAP


class Editor:
    """Per-step controller for one editing session.

    Without an explicit session or settings, layout settings are loaded from
    the user's settings file.
    """

    def __init__(self, session: Optional[EditSession] = None,
                 settings: Optional[EditorSettings] = None,
                 window_width: float = EditorConstants.WINDOW_WIDTH,
                 persistence: Optional[SettingsPersistence] = None):
        self.persistence = persistence or get_persistence()
        if session is None:
            if settings is None:
                settings = self.persistence.load_settings()
            session = EditSession(settings=settings)
        self.session = session
        if not len(self.session.document):
            self.session.document.append(EditorConstants.PLACEHOLDER_TEXT)
        self.command_registry = CommandRegistry()
        self.window_width = window_width
        self.modified = False

    @property
    def document(self) -> Document:
        return self.session.document

    @property
    def focus(self) -> Optional[Block]:
        return self.session.focus

    def save_settings(self) -> bool:
        """Write the session's layout settings to the settings file."""
        return self.persistence.save_settings(self.session.settings)

    # --- Keyboard ---

    def handle_key_event(self, key_event: KeyEvent, now: float) -> bool:
        """Process one key event.

        Held keys only act when their axis' repeat timer allows it.

        Returns:
            True if the document was modified
        """
        if self.session.focus is None:
            return False
        timer = self.session.timers.for_key(key_event.value)
        if timer is not None:
            # Any held navigation or delete key keeps the caret solid
            self.session.touch(now)
            if not timer.should_fire(not key_event.is_held, key_event.is_held, now):
                return False
        elif key_event.is_held and key_event.key_type != KeyType.REGULAR:
            # Enter acts once per press
            return False
        modified = self.command_registry.execute(self, key_event)
        if modified or key_event.key_type == KeyType.REGULAR:
            self.session.touch(now)
        self.modified = self.modified or modified
        return modified

    def handle_key(self, key: str, now: float, held: bool = False) -> bool:
        """Parse a key token and process it."""
        return self.handle_key_event(parse_key(key, held), now)

    # --- Geometry ---

    def block_frames(self) -> list[BlockFrame]:
        """Stack the blocks from the top of the document."""
        settings = self.session.settings
        frames = []
        top = EditorConstants.DOCUMENT_TOP
        for block in self.document:
            lines = self.session.layout(block).line_count
            height = lines * settings.line_height + 2 * EditorConstants.BLOCK_PADDING
            frames.append(BlockFrame(block, top, height, lines))
            top += height + EditorConstants.BLOCK_GAP
        return frames

    def block_at(self, x: float, y: float) -> Optional[BlockFrame]:
        if not 0 <= x < self.window_width:
            return None
        for frame in self.block_frames():
            if frame.top <= y < frame.bottom:
                return frame
        return None

    def char_index_at(self, frame: BlockFrame, x: float, y: float) -> int:
        """Offset in the frame's block nearest to a window point."""
        layout = self.session.layout(frame.block)
        return layout.hit_test(x - EditorConstants.TEXT_LEFT, y - frame.text_top,
                               self.session.settings.line_height)

    # --- Pointer ---

    def pointer_press(self, x: float, y: float, now: float) -> Optional[Block]:
        """Focus the block under the pointer and start a selection there."""
        frame = self.block_at(x, y)
        if frame is None:
            return None
        index = self.char_index_at(frame, x, y)
        block = frame.block
        self.session.focus = block
        block.set_cursor(index)
        self.session.set_anchor(block, index)
        update_selection_range(self.session, block, index)
        self.session.touch(now)
        return block

    def pointer_drag(self, x: float, y: float) -> Optional[Block]:
        """Extend the selection to the point under a held pointer."""
        if self.session.anchor is None:
            return None
        frame = self.block_at(x, y)
        if frame is None:
            return None
        index = self.char_index_at(frame, x, y)
        block = frame.block
        block.set_cursor(index)
        self.session.focus = block
        update_selection_range(self.session, block, index)
        return block

    def cursor_visible(self, now: float) -> bool:
        return self.session.cursor_visible(now)
