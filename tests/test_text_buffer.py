"""Tests for TextBuffer line views and splices."""

import pytest

from textpatch_mcp.engine import TextBuffer


def test_lines_split_on_newline_only():
    """Carriage returns stay part of line content."""
    buffer = TextBuffer("a\r\nb\r\n")
    assert buffer.lines == ["a\r", "b\r", ""]
    assert buffer.line_count == 3


def test_empty_text_has_one_empty_line():
    buffer = TextBuffer("")
    assert buffer.lines == [""]
    assert buffer.line_count == 1
    assert buffer.line(0) == ""


def test_line_offsets():
    buffer = TextBuffer("a\nbb\nc")
    assert buffer.line_start(1) == 2
    assert buffer.line_end(1) == 4
    assert buffer.line(1) == "bb"
    assert buffer.line_end(2) == 6


def test_line_of_offset():
    buffer = TextBuffer("a\nbb\nc")
    assert buffer.line_of(0) == 0
    assert buffer.line_of(1) == 0  # the newline belongs to the line it ends
    assert buffer.line_of(2) == 1
    assert buffer.line_of(5) == 2


class TestSpliceLines:
    """splice_lines must match split/splice/join on a line list."""

    @pytest.mark.parametrize(
        "text,first,last,new_lines",
        [
            ("a\nb\nc", 1, 2, ["x", "y"]),  # replace middle
            ("a\nb\nc", 1, 1, ["x"]),  # insert before line
            ("a\nb\nc", 3, 3, ["x"]),  # append after last line
            ("a\nb\nc", 1, 2, []),  # delete middle
            ("a\nb\nc", 2, 3, []),  # delete last
            ("a\nb\nc", 0, 1, []),  # delete first
            ("a\nb\nc", 0, 3, []),  # delete everything
            ("a\nb\n", 2, 3, []),  # delete trailing empty line
            ("a\nb\n", 0, 3, ["z"]),  # replace everything
            ("", 0, 0, ["x"]),  # insert into empty text
            ("a\nb", 1, 1, []),  # no-op
        ],
    )
    def test_equivalent_to_list_splice(self, text, first, last, new_lines):
        expected_lines = text.split("\n")
        expected_lines[first:last] = new_lines
        expected = "\n".join(expected_lines)

        buffer = TextBuffer(text)
        buffer.splice_lines(first, last, new_lines)

        assert buffer.text == expected

    def test_records_character_edit(self):
        buffer = TextBuffer("a\nb\nc")
        edit = buffer.splice_lines(1, 2, ["x", "y"])

        assert buffer.text == "a\nx\ny\nc"
        assert (edit.start, edit.old_end, edit.new_end) == (2, 3, 5)
        assert edit.delta == 2

    def test_line_cache_invalidated(self):
        buffer = TextBuffer("a\nb")
        assert buffer.line_count == 2
        buffer.splice_lines(2, 2, ["c"])
        assert buffer.line_count == 3
        assert buffer.line(2) == "c"

    def test_invalid_range_raises(self):
        buffer = TextBuffer("a\nb")
        with pytest.raises(IndexError):
            buffer.splice_lines(1, 3, [])


def test_splice_text_invalid_range_raises():
    buffer = TextBuffer("abc")
    with pytest.raises(IndexError):
        buffer.splice_text(2, 1, "")
    assert buffer.text == "abc"
