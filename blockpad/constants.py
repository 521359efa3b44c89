"""Constants and configuration for the blockpad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Wrap geometry
    MAX_WIDTH = 680.0  # Wrap width of a block's text area
    FONT_SIZE = 20.0
    LINE_HEIGHT = 24.0
    CHAR_GAP = 1.0  # Spacing added after every visible character

    # Accepted input characters (inclusive)
    PRINTABLE_MIN = 32
    PRINTABLE_MAX = 125

    # Block geometry
    DOCUMENT_TOP = 20.0  # Y of the first block
    TEXT_LEFT = 60.0  # X where block text starts
    BLOCK_PADDING = 4.0  # Space above and below the text of a block
    BLOCK_GAP = 2.0  # Space between two blocks
    WINDOW_WIDTH = 800.0

    # Highlight markers
    NEWLINE_HIGHLIGHT_WIDTH = 5.0
    EMPTY_BLOCK_HIGHLIGHT_WIDTH = 10.0

    # Key repeat timing (seconds)
    HORIZONTAL_REPEAT_DELAY = 0.4
    HORIZONTAL_REPEAT_INTERVAL = 0.04
    VERTICAL_REPEAT_DELAY = 0.4
    VERTICAL_REPEAT_INTERVAL = 0.05
    DELETE_REPEAT_DELAY = 0.5
    DELETE_REPEAT_INTERVAL = 0.05

    # Cursor blink (seconds)
    CURSOR_SOLID_AFTER_ACTION = 0.6  # Caret stays visible this long after input
    CURSOR_BLINK_RATE = 2  # Visibility toggles per second

    # Default content
    DEFAULT_FONT_NAME = "Monospace"
    PLACEHOLDER_TEXT = "click here to edit..."
