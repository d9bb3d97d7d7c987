"""Unified diff generation and application.

Diffs are keyed by the caller's relative path:

    Index: src/app.py
    ===================================================================
    --- src/app.py<TAB>
    +++ src/app.py<TAB>
    @@ -1,3 +1,2 @@
     a
    -b
     c

Both ranges of a hunk header always carry a count ("@@ -2,1 +2,1 @@").
Lines are split on "\\n" only, so carriage returns and other control
characters stay part of the line content and survive a round trip.
"""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass, field

SEPARATOR = "=" * 67
NO_NEWLINE_MARKER = "\\ No newline at end of file"

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def split_lines_keepends(text: str) -> list[str]:
    """Split on "\\n" keeping terminators; a trailing newline adds no empty line."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _full_hunk_header(header: str) -> str:
    """Rewrite a difflib hunk header so both ranges always carry a line count."""
    match = _HUNK_HEADER.match(header)
    assert match is not None
    old_start, old_count, new_start, new_count = (
        group if group is not None else "1" for group in match.groups()
    )
    return f"@@ -{old_start},{old_count} +{new_start},{new_count} @@\n"


def unified_diff(original: str, modified: str, path: str, context_lines: int = 3) -> str:
    """Generate unified diff between original and modified content.

    Args:
        original: Content before the edit session
        modified: Content after all applied changes
        path: Relative path used in the Index/---/+++ headers
        context_lines: Unchanged lines shown around each change

    Returns:
        Unified diff string (headers only when contents are identical)
    """
    # Old and new headers are empty, so each file line ends in a bare tab
    out = [f"Index: {path}\n", f"{SEPARATOR}\n", f"--- {path}\t\n", f"+++ {path}\t\n"]

    diff_lines = difflib.unified_diff(
        split_lines_keepends(original),
        split_lines_keepends(modified),
        fromfile=path,
        tofile=path,
        n=context_lines,
    )
    for i, line in enumerate(diff_lines):
        if i < 2:
            # difflib's own ---/+++ headers; ours are always emitted
            continue
        if line.startswith("@@"):
            out.append(_full_hunk_header(line))
        elif line.endswith("\n"):
            out.append(line)
        else:
            out.append(f"{line}\n{NO_NEWLINE_MARKER}\n")

    return "".join(out)


@dataclass
class _Hunk:
    old_start: int
    old_count: int
    old_lines: list[str] = field(default_factory=list)
    new_lines: list[str] = field(default_factory=list)


def _parse_hunks(diff_text: str) -> list[_Hunk]:
    lines = diff_text.split("\n")
    hunks: list[_Hunk] = []
    i = 0

    while i < len(lines):
        line = lines[i]
        match = _HUNK_HEADER.match(line)
        if not match:
            # Index/separator/---/+++ headers and trailing blank
            i += 1
            continue

        old_start = int(match.group(1))
        old_count = int(match.group(2)) if match.group(2) is not None else 1
        new_count = int(match.group(4)) if match.group(4) is not None else 1

        old_lines: list[str] = []
        new_lines: list[str] = []
        # Which side(s) the previous body line belonged to, for "\ No newline" markers
        last_sides: tuple[list[str], ...] = ()
        i += 1

        while i < len(lines) and (
            len(old_lines) < old_count or len(new_lines) < new_count or lines[i].startswith("\\")
        ):
            body = lines[i]
            if body.startswith("\\"):
                for side in last_sides:
                    side[-1] = side[-1].removesuffix("\n")
                last_sides = ()
            elif body.startswith(" "):
                old_lines.append(body[1:] + "\n")
                new_lines.append(body[1:] + "\n")
                last_sides = (old_lines, new_lines)
            elif body.startswith("-"):
                old_lines.append(body[1:] + "\n")
                last_sides = (old_lines,)
            elif body.startswith("+"):
                new_lines.append(body[1:] + "\n")
                last_sides = (new_lines,)
            else:
                raise ValueError(f"Invalid patch line: {body!r}")
            i += 1

        if len(old_lines) != old_count or len(new_lines) != new_count:
            raise ValueError(f"Truncated hunk at line {old_start}")

        hunks.append(_Hunk(old_start, old_count, old_lines, new_lines))

    return hunks


def apply_unified_diff(content: str, diff_text: str) -> str:
    """Apply a unified diff produced by unified_diff() to content.

    Args:
        content: Original file content
        diff_text: Unified diff

    Returns:
        Patched content

    Raises:
        ValueError: Invalid diff format or context mismatch
    """
    result_lines = split_lines_keepends(content)

    # Apply hunks in reverse order to maintain line numbers
    for hunk in reversed(_parse_hunks(diff_text)):
        old_lines = hunk.old_lines
        new_lines = hunk.new_lines
        old_start = hunk.old_start

        # An empty old range names the line *after which* to insert
        start = old_start if hunk.old_count == 0 else old_start - 1
        end = start + len(old_lines)

        if end > len(result_lines):
            raise ValueError(
                f"Patch hunk extends beyond file end: line {end} > {len(result_lines)}"
            )
        for offset, expected_line in enumerate(old_lines):
            actual_line = result_lines[start + offset]
            if actual_line != expected_line:
                raise ValueError(
                    f"Patch context mismatch at line {start + offset + 1}: "
                    f"expected {expected_line!r}, got {actual_line!r}"
                )

        result_lines[start:end] = new_lines

    return "".join(result_lines)
