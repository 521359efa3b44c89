"""Cursor movement within and across blocks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .document import Block
from .selection import update_selection_range

if TYPE_CHECKING:
    from .session import EditSession


def _check_direction(direction: int) -> None:
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or 1, not {direction}")


def _begin_move(session: "EditSession", block: Block, extend: bool) -> None:
    if extend:
        if session.anchor is None:
            session.set_anchor(block, block.cursor_index)
    else:
        session.clear_selection()


def _finish_move(session: "EditSession", block: Block, extend: bool) -> Block:
    session.focus = block
    if extend:
        update_selection_range(session, block, block.cursor_index)
    return block


def move_horizontal(session: "EditSession", direction: int, extend: bool = False) -> Optional[Block]:
    """Move the cursor one character left (-1) or right (+1).

    Movement stops at either end of the block.
    """
    _check_direction(direction)
    block = session.focus
    if block is None:
        return None
    _begin_move(session, block, extend)
    block.set_cursor(block.cursor_index + direction)
    return _finish_move(session, block, extend)


def move_vertical(session: "EditSession", direction: int, extend: bool = False) -> Optional[Block]:
    """Move the cursor one visual line up (-1) or down (+1).

    The cursor keeps its horizontal offset as closely as the target line
    allows. Leaving the top or bottom line of a block continues into the
    neighbouring block; with no neighbour the cursor stays put.

    Returns:
        The block that has focus after the move
    """
    _check_direction(direction)
    block = session.focus
    if block is None:
        return None
    _begin_move(session, block, extend)

    layout = session.layout(block)
    current = layout.position(block.cursor_index)
    target_line = current.line + direction

    if target_line < 0:
        previous = session.document.predecessor(block)
        if previous is None:
            return _finish_move(session, block, extend)
        block = previous
        layout = session.layout(block)
        target_line = layout.last_line
    elif target_line > layout.last_line:
        following = session.document.successor(block)
        if following is None:
            return _finish_move(session, block, extend)
        block = following
        layout = session.layout(block)
        target_line = 0

    block.cursor_index = layout.locate(target_line, current.x)
    return _finish_move(session, block, extend)


def move_left(session: "EditSession", extend: bool = False) -> Optional[Block]:
    return move_horizontal(session, -1, extend)


def move_right(session: "EditSession", extend: bool = False) -> Optional[Block]:
    return move_horizontal(session, 1, extend)


def move_up(session: "EditSession", extend: bool = False) -> Optional[Block]:
    return move_vertical(session, -1, extend)


def move_down(session: "EditSession", extend: bool = False) -> Optional[Block]:
    return move_vertical(session, 1, extend)
