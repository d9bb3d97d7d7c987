"""Canonical working text for one edit session.

A single string is the only mutable state. Line views and line offsets are
derived on demand and cached until the next splice, so there is never a line
array and a flat string to keep in sync.

Lines are the result of ``text.split("\\n")``: a trailing newline produces a
final empty line, and an empty file has exactly one (empty) line.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True)
class TextEdit:
    """Character-level record of one splice.

    Attributes:
        start: Offset where the replaced range began
        old_end: End offset of the replaced range, before the splice
        new_end: End offset of the inserted text, after the splice
    """

    start: int
    old_end: int
    new_end: int

    @property
    def delta(self) -> int:
        """Change in buffer length caused by this splice."""
        return self.new_end - self.old_end


class TextBuffer:
    """Mutable text with line-offset helpers."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts: list[int] | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> list[str]:
        """Fresh list of the buffer's lines (without terminators)."""
        return self._text.split("\n")

    @property
    def line_count(self) -> int:
        return len(self._starts())

    def _starts(self) -> list[int]:
        if self._line_starts is None:
            starts = [0]
            pos = self._text.find("\n")
            while pos != -1:
                starts.append(pos + 1)
                pos = self._text.find("\n", pos + 1)
            self._line_starts = starts
        return self._line_starts

    def line_start(self, index: int) -> int:
        """Offset of the first character of line ``index`` (0-based)."""
        return self._starts()[index]

    def line_end(self, index: int) -> int:
        """Offset just past the last character of line ``index``, excluding its newline."""
        starts = self._starts()
        if index + 1 < len(starts):
            return starts[index + 1] - 1
        return len(self._text)

    def line_of(self, offset: int) -> int:
        """0-based index of the line containing ``offset``."""
        return bisect_right(self._starts(), offset) - 1

    def line(self, index: int) -> str:
        return self._text[self.line_start(index) : self.line_end(index)]

    def splice_text(self, start: int, end: int, replacement: str) -> TextEdit:
        """Replace the character range [start, end) with ``replacement``."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"Invalid splice range [{start}, {end}) for length {len(self._text)}")
        self._text = self._text[:start] + replacement + self._text[end:]
        self._line_starts = None
        return TextEdit(start=start, old_end=end, new_end=start + len(replacement))

    def splice_lines(self, first: int, last: int, new_lines: list[str]) -> TextEdit:
        """Replace lines [first, last) with ``new_lines``.

        Equivalent to splitting on "\\n", splicing the list and joining again,
        expressed as a single character-level splice.
        """
        count = self.line_count
        if not 0 <= first <= last <= count:
            raise IndexError(f"Invalid line range [{first}, {last}) for {count} lines")

        if new_lines and last > first:
            return self.splice_text(
                self.line_start(first), self.line_end(last - 1), "\n".join(new_lines)
            )

        if new_lines:
            # Pure insertion before line `first`, or after the last line
            if first < count:
                offset = self.line_start(first)
                return self.splice_text(offset, offset, "\n".join(new_lines) + "\n")
            end = len(self._text)
            return self.splice_text(end, end, "\n" + "\n".join(new_lines))

        if last == first:
            offset = self.line_start(first) if first < count else len(self._text)
            return TextEdit(start=offset, old_end=offset, new_end=offset)

        # Pure deletion: drop the lines together with one separating newline
        if last < count:
            return self.splice_text(self.line_start(first), self.line_start(last), "")
        if first > 0:
            return self.splice_text(self.line_end(first - 1), len(self._text), "")
        return self.splice_text(0, len(self._text), "")
