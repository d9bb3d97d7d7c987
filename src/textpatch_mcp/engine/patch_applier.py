"""
Patch applier - performs insert/replace/delete on a session's text buffer.

Every operation is a single splice on the buffer, so it either fully applies
or leaves the buffer untouched. The applier remembers the region each applied
change produced and refuses later changes whose target overlaps one of them.
"""

from __future__ import annotations

import logging

from .indentation import apply_indentation, detect_indent, indentation_of
from .matcher import MatchSpan
from .text_buffer import TextBuffer, TextEdit

logger = logging.getLogger(__name__)


def _ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Overlap test where zero-width ranges are points.

    A point overlaps a range only when strictly inside it; two points never
    overlap; touching ranges do not overlap.
    """
    a_point = a_start == a_end
    b_point = b_start == b_end
    if a_point and b_point:
        return False
    if a_point:
        return b_start < a_start < b_end
    if b_point:
        return a_start < b_start < a_end
    return a_start < b_end and b_start < a_end


class PatchApplier:
    """Apply confirmed matches to one buffer."""

    def __init__(self, buffer: TextBuffer) -> None:
        self.buffer = buffer
        # Regions written by applied changes, in current buffer coordinates
        self._applied: list[tuple[int, int]] = []

    @property
    def applied_regions(self) -> list[tuple[int, int]]:
        return list(self._applied)

    def overlaps_applied(self, start: int, end: int) -> bool:
        """Check whether [start, end) touches text produced or removed by an earlier change."""
        return any(_ranges_overlap(start, end, rs, re_) for rs, re_ in self._applied)

    def _record(self, edit: TextEdit) -> None:
        shifted: list[tuple[int, int]] = []
        for rs, re_ in self._applied:
            if rs >= edit.old_end:
                shifted.append((rs + edit.delta, re_ + edit.delta))
            elif re_ <= edit.start:
                shifted.append((rs, re_))
            else:
                # Cannot happen for accepted changes; keep the union to stay conservative
                shifted.append((min(rs, edit.start), max(re_ + edit.delta, edit.new_end)))
        shifted.append((edit.start, edit.new_end))
        self._applied = shifted

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert(self, start_line: int, content: str, preserve_indentation: bool = True) -> bool:
        """Insert content before 1-based ``start_line``.

        An anchor past the end of the buffer appends instead of failing.
        Indentation comes from the preceding line, or from the file's dominant
        indent unit when inserting at the very top.

        Returns:
            False if the insertion point lies inside an earlier change's region
        """
        line_count = self.buffer.line_count
        if start_line - 1 > line_count:
            logger.warning(
                f"start_line {start_line} is beyond the end of the file "
                f"({line_count} lines), appending instead"
            )
        insert_at = min(start_line - 1, line_count)

        offset = (
            self.buffer.line_start(insert_at) if insert_at < line_count else len(self.buffer.text)
        )
        if self.overlaps_applied(offset, offset):
            return False

        indent = ""
        if preserve_indentation:
            if insert_at > 0:
                indent = indentation_of(self.buffer.line(insert_at - 1))
            else:
                indent = detect_indent(self.buffer.text)

        edit = self.buffer.splice_lines(insert_at, insert_at, apply_indentation(content, indent))
        self._record(edit)
        return True

    def replace(self, span: MatchSpan, content: str, preserve_indentation: bool = True) -> bool:
        """Replace a matched span, re-indented to the span's first line.

        Returns:
            False if the span overlaps an earlier change's region
        """
        if self.overlaps_applied(span.start, span.end):
            return False

        indent = indentation_of(self.buffer.line(span.first_line)) if preserve_indentation else ""
        new_lines = apply_indentation(content, indent)

        if span.line_aligned:
            assert span.last_line is not None
            edit = self.buffer.splice_lines(span.first_line, span.last_line, new_lines)
        else:
            edit = self.buffer.splice_text(span.start, span.end, "\n".join(new_lines))
        self._record(edit)
        return True

    def delete(self, span: MatchSpan) -> bool:
        """Remove a matched span.

        Returns:
            False if the span overlaps an earlier change's region
        """
        if self.overlaps_applied(span.start, span.end):
            return False

        if span.line_aligned:
            assert span.last_line is not None
            edit = self.buffer.splice_lines(span.first_line, span.last_line, [])
        else:
            edit = self.buffer.splice_text(span.start, span.end, "")
        self._record(edit)
        return True
