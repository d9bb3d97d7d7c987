"""Indentation helpers for re-indenting inserted and replacement text."""

from __future__ import annotations

import re

# Whitespace other than line terminators, so a stray "\r" is never taken as indent
_LEADING_WHITESPACE = re.compile(r"^[^\S\r\n]*")
# A run of spaces or a run of tabs, never mixed
_INDENT_RUN = re.compile(r"^(?:( )+|\t+)")


def indentation_of(line: str | None) -> str:
    """Return the leading whitespace run of a line ("" for None or empty)."""
    if not line:
        return ""
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


def apply_indentation(text: str, indent: str) -> list[str]:
    """Prefix every line of text with indent.

    This is a uniform prefix, not a relative re-indent: nested lines keep
    their own leading whitespace on top of the prefix.
    """
    return [indent + line for line in text.split("\n")]


def _indent_tally(text: str, ignore_single_spaces: bool) -> dict[tuple[str, int], list[int]]:
    """Map (indent type, indent change) to [uses, weight].

    A line indented the same as the one before adds no use but one unit of
    weight to the previous key, which breaks ties between equally used keys.
    """
    tally: dict[tuple[str, int], list[int]] = {}
    prev_type = ""
    prev_size = 0
    key: tuple[str, int] | None = None

    for line in text.split("\n"):
        if not line:
            continue

        match = _INDENT_RUN.match(line)
        if match is None:
            prev_type, prev_size = "", 0
            continue

        indent_type = " " if match.group(1) else "\t"
        size = len(match.group(0))
        if ignore_single_spaces and indent_type == " " and size == 1:
            continue
        if indent_type != prev_type:
            prev_size = 0
        prev_type = indent_type

        difference = size - prev_size
        prev_size = size
        if difference == 0:
            use, weight = 0, 1
        else:
            use, weight = 1, 0
            key = (indent_type, abs(difference))

        if key is None:
            continue
        entry = tally.get(key)
        if entry is None:
            tally[key] = [1, 0]
        else:
            entry[0] += use
            entry[1] += weight

    return tally


def detect_indent(text: str) -> str:
    """Detect a file's dominant indentation unit.

    Tallies the indentation *change* between consecutive indented lines,
    keyed by type (tab or space) and amount, and returns the most used one,
    heavier key first on a tie. Single-space indents (JSDoc " * " lines) are
    only considered when nothing else is indented. A file indented 0/4/8/4
    yields "    "; a file with no indentation yields "".

    Args:
        text: Full file content

    Returns:
        Indent unit string (e.g. "  ", "    ", "\\t") or "" if none detected
    """
    tally = _indent_tally(text, ignore_single_spaces=True)
    if not tally:
        tally = _indent_tally(text, ignore_single_spaces=False)

    best: tuple[str, int] | None = None
    max_uses = 0
    max_weight = 0
    for key, (uses, weight) in tally.items():
        if uses > max_uses or (uses == max_uses and weight > max_weight):
            best, max_uses, max_weight = key, uses, weight

    if best is None:
        return ""
    indent_type, amount = best
    return indent_type * amount
