"""Edit operations: insert, delete, merge and split.

Every operation deletes an active selection before doing anything else and
ends by clearing the anchor together with all block selections. Each one
returns the block that has focus afterwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

from .constants import EditorConstants
from .document import Block, Document

if TYPE_CHECKING:
    from .session import EditSession

logger = logging.getLogger(__name__)


def is_insertable(char: str) -> bool:
    """True for the single printable characters the editor accepts."""
    return (len(char) == 1
            and EditorConstants.PRINTABLE_MIN <= ord(char) <= EditorConstants.PRINTABLE_MAX)


def _selected_span(document: Document) -> Optional[Tuple[Block, Block]]:
    """First and last selected blocks, or None when nothing would be deleted."""
    first: Optional[Block] = None
    last: Optional[Block] = None
    for block in document:
        if block.selection is not None:
            if first is None:
                first = block
            last = block

    if first is None or last is None:
        return None
    # A zero-length range on one block is just the cursor
    if first is last and first.selection.is_empty:
        return None
    return first, last


def delete_selected_text(session: "EditSession") -> Optional[Block]:
    """Delete the selected range.

    Returns:
        The surviving block, or None when nothing was selected
    """
    document = session.document
    span = _selected_span(document)
    if span is None:
        return None
    first, last = span

    if first is last:
        selection = first.selection.clamped(len(first))
        first.buffer.remove(selection.start, selection.length)
        first.cursor_index = selection.start
        first.selection = None
        logger.debug(f"Deleted {selection.length} characters from block {first.id}")
    else:
        start = min(first.selection.start, len(first))
        tail_start = min(last.selection.length, len(last))
        tail = last.buffer.tail(tail_start)

        # Drop every block after the first one up to and including the last
        doomed = []
        block = document.successor(first)
        while block is not None:
            doomed.append(block)
            if block is last:
                break
            block = document.successor(block)
        for block in doomed:
            document.remove(block)

        first.buffer.truncate(start)
        first.buffer.append(tail)
        first.cursor_index = start
        first.selection = None
        logger.debug(f"Deleted selection spanning blocks {first.id}..{last.id}")

    session.focus = first
    return first


def _delete_selection_first(session: "EditSession") -> Optional[Block]:
    survivor = delete_selected_text(session)
    if survivor is not None:
        session.focus = survivor
    return session.focus


def _insert_at_cursor(session: "EditSession", text: str) -> Optional[Block]:
    block = _delete_selection_first(session)
    if block is None:
        return None
    block.buffer.insert(block.cursor_index, text)
    block.cursor_index += len(text)
    session.clear_selection()
    return block


def insert_char(session: "EditSession", char: str) -> Optional[Block]:
    """Type a character at the cursor, replacing any selection.

    Characters outside the printable range are ignored.
    """
    if not is_insertable(char):
        return session.focus
    return _insert_at_cursor(session, char)


def insert_soft_break(session: "EditSession") -> Optional[Block]:
    """Insert a newline inside the current block (Shift+Enter)."""
    return _insert_at_cursor(session, "\n")


def type_text(session: "EditSession", text: str) -> Optional[Block]:
    """Feed a string through the insert path, one character at a time."""
    block = session.focus
    for char in text:
        if char == "\n":
            block = insert_soft_break(session)
        else:
            block = insert_char(session, char)
    return block


def backspace(session: "EditSession") -> Optional[Block]:
    """Delete the selection, the character before the cursor, or merge upward."""
    survivor = delete_selected_text(session)
    if survivor is not None:
        session.clear_selection()
        return survivor

    block = session.focus
    if block is None:
        return None
    if block.cursor_index > 0:
        block.buffer.remove(block.cursor_index - 1, 1)
        block.cursor_index -= 1
    else:
        block = merge_with_previous(session, block)
    session.clear_selection()
    return block


def merge_with_previous(session: "EditSession", block: Block) -> Block:
    """Append a block's text to its predecessor and remove it.

    Returns:
        The predecessor, with its cursor at the join point
    """
    document = session.document
    previous = document.predecessor(block)
    if previous is None:
        return block
    join_at = len(previous)
    previous.buffer.append(block.text)
    document.remove(block)
    previous.cursor_index = join_at
    session.focus = previous
    logger.debug(f"Merged block {block.id} into {previous.id}")
    return previous


def delete_forward(session: "EditSession") -> Optional[Block]:
    """Delete the selection or the character under the cursor.

    At the end of a block nothing happens; the next block is not joined.
    """
    survivor = delete_selected_text(session)
    if survivor is not None:
        session.clear_selection()
        return survivor

    block = session.focus
    if block is None:
        return None
    if block.cursor_index < len(block):
        block.buffer.remove(block.cursor_index, 1)
    session.clear_selection()
    return block


def split_block(session: "EditSession") -> Optional[Block]:
    """Split the focused block at the cursor (Enter).

    An active selection is replaced by the split. The text after the split
    point moves into a new block inserted right after, which receives focus
    with its cursor at the start.
    """
    document = session.document
    span = _selected_span(document)
    if span is None:
        block = session.focus
        if block is None:
            return None
        after = block
        split_at = block.cursor_index
        tail = block.buffer.tail(split_at)
    else:
        block, after = span
        if block is after:
            selection = block.selection.clamped(len(block))
            split_at = selection.start
            tail = block.buffer.tail(selection.end)
        else:
            split_at = min(block.selection.start, len(block))
            tail = after.buffer.tail(min(after.selection.length, len(after)))

    # Allocate before changing any text
    new_block = document.insert_after(after, tail)
    if span is not None:
        delete_selected_text(session)
    block.buffer.truncate(split_at)
    new_block.cursor_index = 0
    session.focus = new_block
    session.clear_selection()
    logger.debug(f"Split block {block.id} at {split_at} into {new_block.id}")
    return new_block
