"""Formatting utilities for MCP tool responses.

Two output formats:
- Markdown: one section per file with status, counts, message and a fenced diff
- JSON: the batch result as plain data, absent fields omitted
"""

from typing import Any

from .engine import EditFileResult, EditStatus

_STATUS_LABELS = {
    EditStatus.SUCCESS: "✅ success",
    EditStatus.SKIPPED: "⏭️ skipped",
    EditStatus.FAILED: "❌ failed",
}


def format_edit_result_json(result: EditFileResult) -> dict[str, Any]:
    """Serialize a batch result, omitting absent message/diff fields."""
    return result.model_dump(mode="json", exclude_none=True)


def format_edit_result_markdown(result: EditFileResult, dry_run: bool = False) -> str:
    """Format a batch edit result as markdown.

    Args:
        result: Batch result with one record per file
        dry_run: Whether the batch ran without writing (shown in the header)

    Returns:
        Markdown report with a section per file and fenced diffs
    """
    counts = {status: 0 for status in EditStatus}
    for record in result.results:
        counts[record.status] += 1

    header = f"## Edit Results ({len(result.results)} files)"
    if dry_run:
        header += " - dry run"
    lines = [
        header,
        "",
        (
            f"**Succeeded**: {counts[EditStatus.SUCCESS]} | "
            f"**Skipped**: {counts[EditStatus.SKIPPED]} | "
            f"**Failed**: {counts[EditStatus.FAILED]}"
        ),
    ]

    for record in result.results:
        lines.append("")
        lines.append(f"### `{record.path}`")
        lines.append(f"- **Status**: {_STATUS_LABELS[record.status]}")
        lines.append(
            f"- **Changes**: {record.changes_applied} applied, {record.changes_skipped} skipped"
        )
        if record.message:
            lines.append(f"- **Message**: {record.message}")
        if record.diff:
            lines.append("")
            lines.append("```diff")
            lines.append(record.diff.rstrip("\n"))
            lines.append("```")

    return "\n".join(lines)


__all__ = [
    "format_edit_result_json",
    "format_edit_result_markdown",
]
