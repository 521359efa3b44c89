"""Document and block store.

Blocks live in an arena keyed by their id. Each block records the ids of
its neighbours, so insertion and removal never scan the chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .buffer import TextBuffer

logger = logging.getLogger(__name__)


class BlockpadError(Exception):
    """Base class for errors raised by the editing core."""


class OutOfMemory(BlockpadError, MemoryError):
    """Raised when a document or block cannot be allocated."""


class InvalidReference(BlockpadError, LookupError):
    """Raised when a block that is not live in the document is used."""


@dataclass(frozen=True)
class Selection:
    """Selected range of a single block, as start offset and length."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def clamped(self, text_length: int) -> "Selection":
        """Return the range limited to a text of the given length."""
        start = min(max(self.start, 0), text_length)
        length = min(max(self.length, 0), text_length - start)
        return Selection(start, length)


@dataclass(eq=False)
class Block:
    """One paragraph of text with its own cursor and selection."""

    id: int
    buffer: TextBuffer
    cursor_index: int = 0
    selection: Optional[Selection] = None
    prev_id: Optional[int] = field(default=None, repr=False)
    next_id: Optional[int] = field(default=None, repr=False)

    @property
    def text(self) -> str:
        return str(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def set_cursor(self, index: int) -> int:
        """Move the cursor, clamped to the text bounds."""
        self.cursor_index = min(max(index, 0), len(self.buffer))
        return self.cursor_index


class Document:
    """Ordered chain of blocks plus the id counter."""

    def __init__(self):
        self._blocks: dict[int, Block] = {}
        self.first_id: Optional[int] = None
        self.last_id: Optional[int] = None
        self.id_counter = 0

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> "Document":
        doc = cls()
        for text in texts:
            doc.append(text)
        return doc

    # --- Queries ---

    @property
    def first(self) -> Optional[Block]:
        return self._blocks.get(self.first_id) if self.first_id is not None else None

    @property
    def last(self) -> Optional[Block]:
        return self._blocks.get(self.last_id) if self.last_id is not None else None

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block: object) -> bool:
        return isinstance(block, Block) and self._blocks.get(block.id) is block

    def __iter__(self) -> Iterator[Block]:
        block_id = self.first_id
        while block_id is not None:
            block = self._blocks[block_id]
            yield block
            block_id = block.next_id

    def get(self, block_id: int) -> Optional[Block]:
        return self._blocks.get(block_id)

    def predecessor(self, block: Block) -> Optional[Block]:
        self._require(block)
        return self._blocks.get(block.prev_id) if block.prev_id is not None else None

    def successor(self, block: Block) -> Optional[Block]:
        self._require(block)
        return self._blocks.get(block.next_id) if block.next_id is not None else None

    def texts(self) -> list[str]:
        return [block.text for block in self]

    def text(self) -> str:
        """Whole document with blocks separated by newlines."""
        return "\n".join(self.texts())

    # --- Mutation ---

    def _require(self, block: Optional[Block]) -> Block:
        if block is None or self._blocks.get(block.id) is not block:
            raise InvalidReference(f"block {getattr(block, 'id', None)} is not in this document")
        return block

    def _create_block(self, text: str) -> Block:
        # Build the block completely before touching the counter or the chain
        try:
            block = Block(id=self.id_counter + 1, buffer=TextBuffer(text))
        except MemoryError as e:
            raise OutOfMemory(f"could not allocate a block of {len(text)} characters") from e
        block.cursor_index = len(block.buffer)
        self.id_counter = block.id
        return block

    def append(self, text: str = "") -> Block:
        """Add a block at the end of the document."""
        block = self._create_block(text)
        block.prev_id = self.last_id
        if self.last_id is None:
            self.first_id = block.id
        else:
            self._blocks[self.last_id].next_id = block.id
        self.last_id = block.id
        self._blocks[block.id] = block
        logger.debug(f"Appended block {block.id}")
        return block

    def insert_after(self, ref: Optional[Block], text: str = "") -> Block:
        """Insert a block right after ref, or at the head when ref is None."""
        if ref is not None:
            self._require(ref)
        block = self._create_block(text)
        if ref is None:
            block.next_id = self.first_id
            if self.first_id is not None:
                self._blocks[self.first_id].prev_id = block.id
            self.first_id = block.id
            if self.last_id is None:
                self.last_id = block.id
        else:
            block.prev_id = ref.id
            block.next_id = ref.next_id
            if ref.next_id is not None:
                self._blocks[ref.next_id].prev_id = block.id
            ref.next_id = block.id
            if self.last_id == ref.id:
                self.last_id = block.id
        self._blocks[block.id] = block
        logger.debug(f"Inserted block {block.id} after {ref.id if ref else 'head'}")
        return block

    def remove(self, ref: Block) -> None:
        """Splice a block out of the chain and release it."""
        self._require(ref)
        if ref.prev_id is None:
            self.first_id = ref.next_id
        else:
            self._blocks[ref.prev_id].next_id = ref.next_id
        if ref.next_id is None:
            self.last_id = ref.prev_id
        else:
            self._blocks[ref.next_id].prev_id = ref.prev_id
        del self._blocks[ref.id]
        ref.prev_id = ref.next_id = None
        ref.selection = None
        logger.debug(f"Removed block {ref.id}")
