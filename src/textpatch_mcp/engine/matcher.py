"""Locate the Nth occurrence of a search target in a text buffer.

Two matching modes:
1. Plain text: line-by-line comparison, scanning forward from the anchor line
   only. Optional leading-whitespace tolerance per line.
2. Regex: Python ``re`` search over the whole buffer. The anchor line plays no
   part in positioning; it is only a hint for re-indentation.

Not finding the requested occurrence is not an error: the finders return None.
A regex that cannot be compiled raises MalformedPatternError.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from .exceptions import MalformedPatternError
from .text_buffer import TextBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSpan:
    """Location of a selected match.

    Attributes:
        start: Character offset of the match start
        end: Character offset just past the match
        first_line: 0-based line containing ``start``
        last_line: Exclusive end line for whole-line (plain-text) matches,
            None for character-level (regex) matches
    """

    start: int
    end: int
    first_line: int
    last_line: int | None = None

    @property
    def line_aligned(self) -> bool:
        return self.last_line is not None


def _lines_equal(file_line: str, search_line: str, ignore_leading_whitespace: bool) -> bool:
    if ignore_leading_whitespace:
        # A blank search line keeps structure: it only matches an empty file line
        if search_line.strip():
            file_line = file_line.lstrip()
        search_line = search_line.lstrip()
    return file_line == search_line


def find_plain(
    buffer: TextBuffer,
    search_pattern: str,
    start_line: int,
    occurrence: int = 1,
    ignore_leading_whitespace: bool = True,
) -> MatchSpan | None:
    """Find the Nth whole-line occurrence of ``search_pattern`` at or below the anchor.

    Args:
        buffer: Current session text
        search_pattern: Target text, split on "\\n" into target lines
        start_line: 1-based anchor; scanning starts at min(start_line - 1, line_count - 1)
        occurrence: 1-based ordinal of the match to select
        ignore_leading_whitespace: Strip leading whitespace on both sides for
            non-blank target lines

    Returns:
        MatchSpan covering the matched lines, or None if the occurrence does not exist
    """
    lines = buffer.lines
    search_lines = search_pattern.split("\n")
    first_candidate = max(min(start_line - 1, len(lines) - 1), 0)
    last_candidate = len(lines) - len(search_lines)

    found = 0
    for i in range(first_candidate, last_candidate + 1):
        if all(
            _lines_equal(lines[i + j], search_line, ignore_leading_whitespace)
            for j, search_line in enumerate(search_lines)
        ):
            found += 1
            if found == occurrence:
                last = i + len(search_lines)
                return MatchSpan(
                    start=buffer.line_start(i),
                    end=buffer.line_end(last - 1),
                    first_line=i,
                    last_line=last,
                )

    logger.debug(
        f"Plain-text target not found (occurrence {occurrence}, {found} found) "
        f"scanning from line {first_candidate + 1}"
    )
    return None


def compile_pattern(pattern: str, path: str) -> re.Pattern[str]:
    """Compile a caller-supplied regex.

    Raises:
        MalformedPatternError: Pattern does not compile
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise MalformedPatternError(pattern, path, str(e)) from e


def iter_regex_spans(regex: re.Pattern[str], text: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) of successive matches over the whole text.

    After a zero-width match the scan position advances by one character, so
    patterns like ``^`` or ``x*`` always terminate.
    """
    pos = 0
    while pos <= len(text):
        match = regex.search(text, pos)
        if match is None:
            return
        yield match.start(), match.end()
        pos = match.end() + 1 if match.end() == match.start() else match.end()


def find_regex(
    buffer: TextBuffer,
    regex: re.Pattern[str],
    occurrence: int = 1,
) -> MatchSpan | None:
    """Find the Nth regex match anywhere in the buffer.

    Returns:
        Character-level MatchSpan, or None if fewer than ``occurrence`` matches exist
    """
    found = 0
    for start, end in iter_regex_spans(regex, buffer.text):
        found += 1
        if found == occurrence:
            return MatchSpan(start=start, end=end, first_line=buffer.line_of(start))

    logger.debug(f"Regex /{regex.pattern}/ not found (occurrence {occurrence}, {found} found)")
    return None


__all__ = [
    "MatchSpan",
    "find_plain",
    "find_regex",
    "compile_pattern",
    "iter_regex_spans",
]
