"""Tests for insert, delete, merge and split operations."""

import pytest

from blockpad.document import Document, OutOfMemory, Selection
from blockpad.editing import (backspace, delete_forward, delete_selected_text, insert_char,
                              insert_soft_break, is_insertable, merge_with_previous, split_block,
                              type_text)
from blockpad.selection import update_selection_range
from blockpad.session import EditSession


def make_session(texts, focus=0, cursor=None):
    session = EditSession(Document.from_texts(texts))
    blocks = list(session.document)
    block = blocks[focus]
    block.cursor_index = len(block) if cursor is None else cursor
    session.focus = block
    return session, blocks


def select(session, start_block, start_index, end_block, end_index):
    session.set_anchor(start_block, start_index)
    update_selection_range(session, end_block, end_index)
    end_block.cursor_index = end_index
    session.focus = end_block


def test_insert_char_at_end():
    """Test typing at the end of a block."""
    session, (block,) = make_session(["hello"])
    assert insert_char(session, "!") is block
    assert block.text == "hello!"
    assert block.cursor_index == 6


def test_insert_char_in_middle():
    """Test typing in the middle of a block."""
    session, (block,) = make_session(["hllo"], cursor=1)
    insert_char(session, "e")
    assert block.text == "hello"
    assert block.cursor_index == 2


@pytest.mark.parametrize("char", ["~", "\t", "\x7f", "é", "ab", ""])
def test_non_printable_characters_are_ignored(char):
    """Test that characters outside the printable range are ignored."""
    session, (block,) = make_session(["abc"], cursor=1)
    assert insert_char(session, char) is block
    assert block.text == "abc"
    assert block.cursor_index == 1


def test_is_insertable_bounds():
    """Test the edges of the printable range."""
    assert is_insertable(" ")
    assert is_insertable("}")
    assert not is_insertable("\x1f")
    assert not is_insertable("~")


def test_insert_then_backspace_is_identity():
    """Test that backspace undoes a typed character."""
    session, (block,) = make_session(["hello"], cursor=2)
    insert_char(session, "x")
    backspace(session)
    assert block.text == "hello"
    assert block.cursor_index == 2


def test_soft_break_stays_in_block():
    """Test that a soft break adds a newline without a new block."""
    session, (block,) = make_session(["ab"], cursor=1)
    insert_soft_break(session)
    assert block.text == "a\nb"
    assert block.cursor_index == 2
    assert len(session.document) == 1


def test_type_text_treats_newline_as_soft_break():
    """Test typing a string with an embedded newline."""
    session, (block,) = make_session([""])
    type_text(session, "hi\nthere")
    assert block.text == "hi\nthere"
    assert block.cursor_index == 8


def test_backspace_removes_previous_char():
    """Test backspace inside a block."""
    session, (block,) = make_session(["hello"], cursor=3)
    backspace(session)
    assert block.text == "helo"
    assert block.cursor_index == 2


def test_backspace_at_block_start_merges():
    """Test that backspace at the start of a block joins it to the previous one."""
    session, (first, second) = make_session(["ab", "cd"], focus=1, cursor=0)
    assert backspace(session) is first
    assert session.document.texts() == ["abcd"]
    assert first.cursor_index == 2
    assert session.focus is first
    assert session.document.last is first


def test_backspace_at_document_start_does_nothing():
    """Test backspace at the very start of the document."""
    session, (first, second) = make_session(["ab", "cd"], focus=0, cursor=0)
    assert backspace(session) is first
    assert session.document.texts() == ["ab", "cd"]
    assert first.cursor_index == 0


def test_merge_with_previous_without_predecessor():
    """Test merging the first block."""
    session, (first,) = make_session(["ab"], cursor=0)
    assert merge_with_previous(session, first) is first
    assert first.text == "ab"


def test_delete_single_block_selection():
    """Test deleting a selection inside one block."""
    session, (block,) = make_session(["abcdefgh"])
    select(session, block, 2, block, 5)
    backspace(session)
    assert block.text == "abfgh"
    assert block.cursor_index == 2
    assert block.selection is None
    assert session.anchor is None


def test_delete_selection_across_three_blocks():
    """Test deleting a selection that spans three blocks."""
    session, (first, middle, last) = make_session(["hello", "big", "world"])
    select(session, first, 2, last, 3)
    assert delete_selected_text(session) is first
    assert session.document.texts() == ["held"]
    assert session.document.first is first
    assert session.document.last is first
    assert first.cursor_index == 2
    assert session.focus is first


def test_delete_selection_keeps_blocks_outside_range():
    """Test that blocks after the selection survive."""
    session, (a, b, c, d) = make_session(["aa", "bb", "cc", "dd"])
    select(session, a, 1, b, 1)
    backspace(session)
    assert session.document.texts() == ["ab", "cc", "dd"]
    assert a.cursor_index == 1
    assert session.document.successor(a) is c


def test_backward_selection_deletes_the_same_text():
    """Test deleting a selection made from the bottom up."""
    session, (first, second) = make_session(["abc", "def"])
    select(session, second, 1, first, 2)
    backspace(session)
    assert session.document.texts() == ["abef"]


def test_delete_selected_text_without_selection():
    """Test that nothing is deleted without a selection."""
    session, (block,) = make_session(["abc"])
    assert delete_selected_text(session) is None
    block.selection = Selection(1, 0)
    assert delete_selected_text(session) is None
    assert block.text == "abc"


def test_typing_replaces_selection():
    """Test that typing replaces the selected text."""
    session, (block,) = make_session(["abcdefgh"])
    select(session, block, 2, block, 5)
    insert_char(session, "X")
    assert block.text == "abXfgh"
    assert block.cursor_index == 3
    assert block.selection is None


def test_delete_forward_removes_char_under_cursor():
    """Test forward delete inside a block."""
    session, (block,) = make_session(["abc"], cursor=1)
    delete_forward(session)
    assert block.text == "ac"
    assert block.cursor_index == 1


def test_delete_forward_at_block_end_does_not_merge():
    """Test that forward delete at the end of a block leaves the next block alone."""
    session, (first, second) = make_session(["ab", "cd"], focus=0)
    delete_forward(session)
    assert session.document.texts() == ["ab", "cd"]
    assert first.cursor_index == 2


def test_split_then_backspace_restores_text():
    """Test that backspace after a split restores the block."""
    session, (block,) = make_session(["hello world"], cursor=5)
    new_block = split_block(session)
    assert session.document.texts() == ["hello", " world"]
    assert session.focus is new_block
    assert new_block.cursor_index == 0

    backspace(session)
    assert session.document.texts() == ["hello world"]
    assert block.cursor_index == 5


def test_split_last_block_updates_last():
    """Test splitting the last block."""
    session, (block,) = make_session(["abc"])
    new_block = split_block(session)
    assert session.document.texts() == ["abc", ""]
    assert session.document.last is new_block


def test_split_replaces_selection():
    """Test that Enter over a selection deletes it first."""
    session, (block,) = make_session(["abcdefgh"])
    select(session, block, 2, block, 5)
    split_block(session)
    assert session.document.texts() == ["ab", "fgh"]


def test_split_in_middle_of_document_links_neighbours():
    """Test splitting a block between two others."""
    session, (a, b, c) = make_session(["a", "bb", "c"], focus=1, cursor=1)
    new_block = split_block(session)
    assert [blk.text for blk in session.document] == ["a", "b", "b", "c"]
    assert session.document.successor(b) is new_block
    assert session.document.predecessor(c) is new_block


def test_split_selection_across_blocks():
    """Enter over a multi-block selection leaves the head and the tail in two blocks."""
    session, (first, middle, last) = make_session(["hello", "big", "world"])
    select(session, first, 2, last, 3)
    new_block = split_block(session)
    assert session.document.texts() == ["he", "ld"]
    assert session.document.successor(first) is new_block
    assert session.document.last is new_block
    assert session.focus is new_block


def _exhausted(text=""):
    raise MemoryError()


def test_split_allocation_failure_leaves_document_unchanged(monkeypatch):
    """A failed split changes no text, focus or cursor."""
    session, (first, second) = make_session(["hello world", "x"], cursor=5)
    monkeypatch.setattr("blockpad.document.TextBuffer", _exhausted)
    with pytest.raises(OutOfMemory):
        split_block(session)
    assert session.document.texts() == ["hello world", "x"]
    assert session.focus is first
    assert first.cursor_index == 5
    assert len(session.document) == 2


def test_split_allocation_failure_keeps_selection(monkeypatch):
    """A failed split over a selection deletes nothing and keeps the range."""
    session, (first, middle, last) = make_session(["hello", "big", "world"])
    select(session, first, 2, last, 3)
    monkeypatch.setattr("blockpad.document.TextBuffer", _exhausted)
    with pytest.raises(OutOfMemory):
        split_block(session)
    assert session.document.texts() == ["hello", "big", "world"]
    assert first.selection == Selection(2, 3)
    assert middle.selection == Selection(0, 3)
    assert last.selection == Selection(0, 3)
    assert session.anchor.block is first
    assert session.focus is last
    assert last.cursor_index == 3


def test_split_allocation_failure_keeps_single_block_selection(monkeypatch):
    """A failed split over a selection within one block keeps its text."""
    session, (block,) = make_session(["abcdefgh"])
    select(session, block, 2, block, 5)
    monkeypatch.setattr("blockpad.document.TextBuffer", _exhausted)
    with pytest.raises(OutOfMemory):
        split_block(session)
    assert block.text == "abcdefgh"
    assert block.selection == Selection(2, 3)


def test_operations_without_focus_return_none():
    """Test that edits without a focused block do nothing."""
    session = EditSession(Document.from_texts(["abc"]))
    assert insert_char(session, "x") is None
    assert backspace(session) is None
    assert delete_forward(session) is None
    assert split_block(session) is None
    assert session.document.texts() == ["abc"]
