"""Anchor-based selection across blocks.

The selection is never accumulated: every update clears all block ranges and
recomputes them from the session's anchor and the moving endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .document import Block, Document, InvalidReference, Selection

if TYPE_CHECKING:
    from .session import EditSession


@dataclass(frozen=True)
class Anchor:
    """Fixed endpoint of an in-progress selection."""
    block: Block
    index: int


def clear_selection(document: Document) -> None:
    """Remove the selected range from every block."""
    for block in document:
        block.selection = None


def selected_blocks(document: Document) -> list[Block]:
    return [block for block in document if block.selection is not None]


def has_selection(document: Document) -> bool:
    """True if deleting the selection would change the document.

    A zero-length range on a single block is only a cursor.
    """
    blocks = selected_blocks(document)
    if not blocks:
        return False
    if len(blocks) == 1:
        return not blocks[0].selection.is_empty
    return True


def update_selection_range(session: "EditSession", focus_block: Optional[Block], focus_index: int) -> None:
    """Recompute block selections between the anchor and a focus point."""
    anchor = session.anchor
    if anchor is None or focus_block is None:
        return
    document = session.document
    if focus_block not in document:
        raise InvalidReference(f"block {focus_block.id} is not in this document")

    clear_selection(document)

    start_block, start_index = anchor.block, anchor.index
    end_block, end_index = focus_block, focus_index
    if start_block is end_block:
        if start_index > end_index:
            start_index, end_index = end_index, start_index
    else:
        # Backwards drag: the focus comes first in document order
        for block in document:
            if block is end_block:
                start_block, start_index, end_block, end_index = end_block, end_index, start_block, start_index
                break
            if block is start_block:
                break

    block = start_block
    while block is not None:
        length = len(block)
        if block is start_block and block is end_block:
            selection = Selection(start_index, end_index - start_index)
        elif block is start_block:
            selection = Selection(start_index, length - start_index)
        elif block is end_block:
            selection = Selection(0, end_index)
        else:
            selection = Selection(0, length)
        block.selection = selection.clamped(length)
        if block is end_block:
            break
        block = document.successor(block)


def selected_text(document: Document) -> str:
    """Get the currently selected text, blocks joined by newlines."""
    parts = []
    for block in selected_blocks(document):
        selection = block.selection.clamped(len(block))
        parts.append(block.buffer[selection.start:selection.end])
    return "\n".join(parts)
