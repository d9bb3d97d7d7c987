"""Request and result models for batch file editing.

Field names match the edit_file tool's wire format.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChangeRequest(BaseModel):
    """Single line-anchored edit.

    The operation is selected by which fields are present:
    1. insert: no search_pattern, replace_content present
    2. replace: search_pattern and replace_content present
    3. delete: search_pattern present, replace_content absent
    """

    path: str = Field(min_length=1, description="Relative path to the file to modify.")
    search_pattern: str | None = Field(
        default=None,
        description=(
            "Multi-line text or regex pattern to find the block to replace or delete. "
            "If empty or omitted, implies insertion at start_line."
        ),
    )
    start_line: int = Field(
        ge=1,
        description=(
            "The 1-based line number where the search_pattern is expected to start, "
            "or where insertion should occur."
        ),
    )
    replace_content: str | None = Field(
        default=None,
        description=(
            "The content to replace the matched block with. If omitted and "
            "search_pattern is present, it deletes the matched block. Required for insertion."
        ),
    )
    use_regex: bool = Field(
        default=False,
        description="Treat search_pattern as a regular expression.",
    )
    ignore_leading_whitespace: bool = Field(
        default=True,
        description=(
            "Ignore leading whitespace on each line of search_pattern when matching plain text."
        ),
    )
    preserve_indentation: bool = Field(
        default=True,
        description=(
            "Adjust the indentation of replace_content to match the context of the "
            "replaced/inserted block."
        ),
    )
    match_occurrence: int = Field(
        default=1,
        ge=1,
        description=(
            "Which occurrence of the search_pattern (scanning forward from start_line "
            "for plain text, over the whole file for regex) to target (1-based)."
        ),
    )

    @model_validator(mode="after")
    def validate_operation(self) -> ChangeRequest:
        """Require a search pattern or replacement content."""
        if not self.search_pattern and self.replace_content is None:
            raise ValueError(
                "Either 'search_pattern' or 'replace_content' must be provided "
                "for a change operation."
            )
        return self

    @property
    def is_insertion(self) -> bool:
        return not self.search_pattern and self.replace_content is not None

    @property
    def is_deletion(self) -> bool:
        return bool(self.search_pattern) and self.replace_content is None


class EditFileArgs(BaseModel):
    """Arguments of one batch edit call."""

    changes: list[ChangeRequest] = Field(
        min_length=1,
        description="List of changes to apply across one or more files.",
    )
    dry_run: bool = Field(
        default=False,
        description=(
            "If true, perform matching and generate diffs but do not write any changes to disk."
        ),
    )
    output_diff: bool = Field(
        default=True,
        description="Whether to include a unified diff string in the result for each file.",
    )


class EditStatus(str, Enum):
    """Per-file outcome of a batch edit."""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class FileEditResult(BaseModel):
    """Outcome for one file. Immutable once the edit session finalizes."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Relative path as supplied in the request")
    status: EditStatus = Field(description="success, failed or skipped")
    message: str | None = Field(
        default=None,
        description="Human-readable outcome, including notes on skipped changes",
    )
    diff: str | None = Field(
        default=None,
        description="Unified diff (only when output_diff=true and changes were applied)",
    )
    changes_applied: int = Field(default=0, description="Number of changes applied")
    changes_skipped: int = Field(default=0, description="Number of changes skipped")


class EditFileResult(BaseModel):
    """Batch outcome: one record per distinct path, in first-encountered order."""

    results: list[FileEditResult] = Field(default_factory=list)


__all__ = [
    "ChangeRequest",
    "EditFileArgs",
    "EditStatus",
    "FileEditResult",
    "EditFileResult",
]
