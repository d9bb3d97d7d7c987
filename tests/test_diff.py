"""Tests for unified diff generation and application."""

import pytest

from textpatch_mcp.engine import apply_unified_diff, unified_diff
from textpatch_mcp.engine.diff import SEPARATOR, split_lines_keepends

HEADER = f"Index: f.txt\n{SEPARATOR}\n--- f.txt\t\n+++ f.txt\t\n"


def test_separator_width():
    assert SEPARATOR == "=" * 67


def test_diff_format():
    diff = unified_diff("a\nb\nc", "a\nc", "f.txt")

    assert diff == HEADER + "@@ -1,3 +1,2 @@\n a\n-b\n c\n\\ No newline at end of file\n"


def test_identical_content_has_headers_only():
    assert unified_diff("a\nb\n", "a\nb\n", "f.txt") == HEADER


def test_context_lines():
    diff = unified_diff("a\nb\nc\n", "a\nB\nc\n", "f.txt", context_lines=0)
    assert diff == HEADER + "@@ -2,1 +2,1 @@\n-b\n+B\n"


def test_hunk_header_always_has_counts():
    diff = unified_diff("a\n", "a\nb\n", "f.txt", context_lines=0)
    assert diff == HEADER + "@@ -1,0 +2,1 @@\n+b\n"


def test_file_headers_end_with_tab():
    lines = unified_diff("x\n", "y\n", "f.txt").split("\n")
    assert lines[2] == "--- f.txt\t"
    assert lines[3] == "+++ f.txt\t"


def test_uses_relative_path_in_headers():
    diff = unified_diff("x\n", "y\n", "src/pkg/mod.py")
    assert diff.startswith("Index: src/pkg/mod.py\n")
    assert "--- src/pkg/mod.py\t\n+++ src/pkg/mod.py\t\n" in diff


def test_split_lines_keepends():
    assert split_lines_keepends("a\r\nb\n") == ["a\r\n", "b\n"]
    assert split_lines_keepends("a\nb") == ["a\n", "b"]
    assert split_lines_keepends("") == []


@pytest.mark.parametrize(
    "original,modified",
    [
        ("a\nb\nc", "a\nc"),
        ("a\nb\nc\n", "a\nx\nb\nc\n"),
        ("a\nb", "a\nc"),  # last line without newline changed
        ("a", "a\n"),  # newline added at end
        ("a\n", "a"),  # newline removed at end
        ("", "x\ny\n"),  # from empty
        ("x\ny", ""),  # to empty
        ("a\r\nb\r\n", "a\r\nB\r\n"),  # CRLF content
        ("--- a\n+++ b\n@@ -1 +1 @@\n", "--- a\n+++ c\n@@ -1 +1 @@\n"),  # diff-like content
        ("\n".join(str(i) for i in range(30)), "\n".join(str(i) for i in range(1, 31))),
    ],
)
def test_round_trip(original, modified):
    diff = unified_diff(original, modified, "f.txt")
    assert apply_unified_diff(original, diff) == modified


def test_round_trip_without_context():
    original = "\n".join(f"line {i}" for i in range(20)) + "\n"
    modified = original.replace("line 3\n", "").replace("line 15", "LINE 15")

    diff = unified_diff(original, modified, "f.txt", context_lines=0)
    assert apply_unified_diff(original, diff) == modified


def test_apply_context_mismatch():
    diff = unified_diff("a\nb\nc", "a\nc", "f.txt")
    with pytest.raises(ValueError, match="context mismatch"):
        apply_unified_diff("x\ny\nz", diff)


def test_apply_beyond_file_end():
    diff = unified_diff("a\nb\nc", "a\nc", "f.txt")
    with pytest.raises(ValueError, match="beyond file end"):
        apply_unified_diff("", diff)


def test_apply_invalid_hunk_line():
    diff = HEADER + "@@ -1,2 +1,2 @@\n a\n?b\n"
    with pytest.raises(ValueError, match="Invalid patch line"):
        apply_unified_diff("a\nb\n", diff)
