"""Tests for the text buffer."""

import pytest

from blockpad.buffer import TextBuffer


def test_insert_and_remove():
    """Test inserting text and removing a range."""
    buf = TextBuffer("hello")
    buf.insert(5, "!")
    assert str(buf) == "hello!"
    assert buf.remove(0, 1) == "h"
    assert buf == "ello!"
    assert len(buf) == 5


def test_remove_clamps_to_end():
    """Test that removing past the end stops at the last character."""
    buf = TextBuffer("abc")
    assert buf.remove(1, 10) == "bc"
    assert buf == "a"


def test_truncate_returns_tail():
    """Test that truncate cuts the buffer and returns what it removed."""
    buf = TextBuffer("hello world")
    assert buf.truncate(5) == " world"
    assert buf == "hello"


def test_tail_and_append():
    """Test reading the tail and appending text."""
    buf = TextBuffer("ab")
    buf.append("cd")
    assert buf.tail(1) == "bcd"
    assert buf[1:3] == "bc"
    assert buf[0] == "a"


def test_out_of_range_positions_leave_buffer_unchanged():
    """Test that bad positions raise without changing the buffer."""
    buf = TextBuffer("abc")
    with pytest.raises(IndexError):
        buf.insert(4, "x")
    with pytest.raises(IndexError):
        buf.remove(-1, 1)
    with pytest.raises(ValueError):
        buf.remove(0, -1)
    assert buf == "abc"


def test_empty_buffer():
    """Test an empty buffer."""
    buf = TextBuffer()
    assert len(buf) == 0
    assert str(buf) == ""
    buf.insert(0, "x")
    assert buf == "x"
