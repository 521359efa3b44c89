"""Owned, growable character buffer used as the text of a block."""

from typing import Iterator, Union


class TextBuffer:
    """A mutable sequence of characters.

    Positions are character offsets. Every mutating method validates its
    range first, so a failed call leaves the buffer unchanged.
    """

    __slots__ = ("_chars",)

    def __init__(self, text: str = ""):
        self._chars: list[str] = list(text)

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return "".join(self._chars)

    def __repr__(self) -> str:
        return f"TextBuffer({str(self)!r})"

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __getitem__(self, index: Union[int, slice]) -> str:
        if isinstance(index, slice):
            return "".join(self._chars[index])
        return self._chars[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, TextBuffer):
            return self._chars == other._chars
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def _check_position(self, index: int) -> None:
        if not 0 <= index <= len(self._chars):
            raise IndexError(f"position {index} outside buffer of length {len(self._chars)}")

    def insert(self, index: int, text: str) -> None:
        """Insert text so that its first character lands at index."""
        self._check_position(index)
        self._chars[index:index] = text

    def remove(self, start: int, length: int = 1) -> str:
        """Remove up to length characters starting at start.

        The length is clamped to the end of the buffer. Returns the removed text.
        """
        self._check_position(start)
        if length < 0:
            raise ValueError("length must not be negative")
        end = min(start + length, len(self._chars))
        removed = "".join(self._chars[start:end])
        del self._chars[start:end]
        return removed

    def truncate(self, index: int) -> str:
        """Drop everything from index onward and return it."""
        return self.remove(index, len(self._chars) - index)

    def append(self, text: str) -> None:
        self._chars.extend(text)

    def tail(self, index: int) -> str:
        """Copy of the text from index to the end."""
        self._check_position(index)
        return "".join(self._chars[index:])
