"""Keyboard input events using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, Shift + Enter


@dataclass
class KeyEvent:
    """A discrete key event supplied by the UI layer."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token the event was parsed from
    is_shift: bool = False
    is_held: bool = False  # Still down from an earlier step (auto-repeat candidate)
    code: Optional[int] = None


SPECIAL_KEYS = {'left', 'right', 'up', 'down', 'enter', 'backspace', 'delete'}


def parse_key(key: str, held: bool = False) -> KeyEvent:
    """Parse a key token into a KeyEvent.

    Accepts single characters and curtsies-style names such as '<LEFT>',
    '<Shift-DOWN>' or '<Ctrl-m>'.

    Args:
        key: The key token
        held: True when the key is reported as held rather than newly pressed

    Returns:
        Parsed KeyEvent
    """
    if key.startswith('<') and key.endswith('>') and len(key) > 2:
        name = key[1:-1].lower().replace('+', '-')
        parts = name.split('-') if '-' in name else [name]
        base = parts[-1]
        mods = set(parts[:-1])
        if base in ('return', 'kp_enter'):
            base = 'enter'
        elif base in ('del',):
            base = 'delete'
        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key, is_held=held)
        # Map Ctrl-J / Ctrl-M to enter
        if 'ctrl' in mods and base in ('j', 'm'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key, is_held=held)
        if 'shift' in mods and base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key, is_shift=True, is_held=held)
        # Fallback: treat unknown token as special
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key, is_held=held)

    if key in ('\r', '\n'):
        return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key, is_held=held)
    if key in ('\x08', '\x7f'):
        return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key, is_held=held)

    code = ord(key) if len(key) == 1 else None
    return KeyEvent(key_type=KeyType.REGULAR, value=key, raw=key, is_held=held, code=code)
