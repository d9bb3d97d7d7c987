"""Batch coordinator - one edit session per file, results in request order."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from .edit_session import EditSession
from .exceptions import InvalidEditRequestError
from .fs_utils import ProjectFileSystem
from .models import ChangeRequest, EditFileArgs, EditFileResult, EditStatus, FileEditResult

logger = logging.getLogger(__name__)


def group_by_path(changes: list[ChangeRequest]) -> dict[str, list[ChangeRequest]]:
    """Group changes by target path.

    Groups appear in first-encountered order and keep request order inside
    each group (dicts preserve insertion order).
    """
    groups: dict[str, list[ChangeRequest]] = {}
    for change in changes:
        groups.setdefault(change.path, []).append(change)
    return groups


class BatchEditor:
    """Apply a batch of change requests across files.

    Files are processed strictly one at a time. A failure in one file never
    prevents the others from being processed.

    Usage:
        editor = BatchEditor(ProjectFileSystem(Path.cwd()))
        result = await editor.apply(EditFileArgs(changes=[...], dry_run=True))
        for record in result.results:
            print(record.path, record.status)
    """

    def __init__(self, fs: ProjectFileSystem, diff_context_lines: int = 3) -> None:
        self.fs = fs
        self.diff_context_lines = diff_context_lines

    async def apply_raw(self, raw_args: dict[str, Any]) -> EditFileResult:
        """Validate untyped arguments, then apply them.

        Raises:
            InvalidEditRequestError: Arguments fail validation (no file is touched)
        """
        try:
            args = EditFileArgs.model_validate(raw_args)
        except ValidationError as e:
            details = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise InvalidEditRequestError(details) from e
        return await self.apply(args)

    async def apply(self, args: EditFileArgs) -> EditFileResult:
        """Run one edit session per distinct path."""
        groups = group_by_path(args.changes)
        logger.info(
            f"Applying {len(args.changes)} change(s) across {len(groups)} file(s)"
            f"{' (dry run)' if args.dry_run else ''}"
        )

        results: list[FileEditResult] = []
        for path, changes in groups.items():
            session = EditSession(
                path,
                changes,
                self.fs,
                dry_run=args.dry_run,
                output_diff=args.output_diff,
                diff_context_lines=self.diff_context_lines,
            )
            try:
                result = await session.run()
            except Exception as e:
                logger.exception(f"Error processing {path}")
                result = FileEditResult(
                    path=path,
                    status=EditStatus.FAILED,
                    message=f"Unexpected error processing {path}: {e}",
                    changes_skipped=len(changes),
                )
            results.append(result)

        return EditFileResult(results=results)
