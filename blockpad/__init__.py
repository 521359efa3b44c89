"""Blockpad - a block-structured text editing core."""

from .document import Block, Document, Selection, BlockpadError, OutOfMemory, InvalidReference
from .layout import LineWrapIndex
from .session import EditSession
from .editor import Editor

__all__ = [
    'Block',
    'Document',
    'Selection',
    'BlockpadError',
    'OutOfMemory',
    'InvalidReference',
    'LineWrapIndex',
    'EditSession',
    'Editor',
]
