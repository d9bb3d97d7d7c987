"""MCP tool implementations for batch file editing.

Following official Anthropic MCP Python SDK patterns:
- Tool functions decorated with @mcp.tool()
- Flat parameter signatures with Annotated types for validation
- Type hints for automatic schema generation
- Async functions for all tools
- Clear docstrings (become tool descriptions)
"""

from typing import Annotated, Any, Literal

from mcp.types import ToolAnnotations
from pydantic import Field

from .context import AppContextType
from .engine import ChangeRequest, EditFileArgs
from .formatting import format_edit_result_json, format_edit_result_markdown
from .server import mcp


@mcp.tool(
    annotations=ToolAnnotations(
        title="Edit Files",
        readOnlyHint=False,
        destructiveHint=True,  # Overwrites file content unless dry_run
        idempotentHint=False,  # Re-applying an insertion inserts again
        openWorldHint=False,
    )
)
async def edit_file(
    changes: Annotated[
        list[ChangeRequest],
        Field(
            description="List of changes to apply across one or more files.",
            min_length=1,
        ),
    ],
    dry_run: Annotated[
        bool,
        Field(
            description=(
                "If true, perform matching and generate diffs but do not write any "
                "changes to disk."
            )
        ),
    ] = False,
    output_diff: Annotated[
        bool,
        Field(description="Include a unified diff in the result for each modified file."),
    ] = True,
    format: Annotated[  # noqa: A002
        Literal["json", "markdown"],
        Field(description="Output format"),
    ] = "json",
    *,
    ctx: AppContextType,
) -> dict[str, Any] | str:
    """Make selective edits to one or more files using plain-text or regex matching.

    Supports insertion, deletion and replacement with indentation preservation and
    diff output. Required: changes. Optional: dry_run, output_diff, format.
    """
    app_ctx = ctx.request_context.lifespan_context
    editor = app_ctx.create_batch_editor()

    # Arguments were validated by FastMCP against the signature above
    result = await editor.apply(
        EditFileArgs(changes=changes, dry_run=dry_run, output_diff=output_diff)
    )

    if format == "markdown":
        return format_edit_result_markdown(result, dry_run=dry_run)
    return format_edit_result_json(result)


# =============================================================================
# Exports
# =============================================================================

__all__ = ["edit_file"]
