"""Edit session - one file's lifecycle within a batch call.

State machine:

    PENDING -> READING -> APPLYING -> FINALIZING -> SUCCEEDED
                  |           |            |
                  +-----------+------------+-----> FAILED
                                           +-----> SKIPPED

Reading failures (invalid path, missing file, I/O error), a malformed regex
and a failed write end the session in FAILED. Changes that find no match or
overlap an earlier change are skipped individually and noted in the message.
"""

from __future__ import annotations

import logging
from enum import Enum

from .diff import unified_diff
from .exceptions import EditError, MalformedPatternError
from .fs_utils import ProjectFileSystem
from .matcher import compile_pattern, find_plain, find_regex
from .models import ChangeRequest, EditStatus, FileEditResult
from .patch_applier import PatchApplier
from .text_buffer import TextBuffer

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle state of an edit session."""

    PENDING = "pending"
    READING = "reading"
    APPLYING = "applying"
    FINALIZING = "finalizing"
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SUCCEEDED, SessionState.SKIPPED, SessionState.FAILED)


class EditSession:
    """Apply an ordered group of changes to a single file.

    Usage:
        session = EditSession("src/app.py", changes, fs, dry_run=True)
        result = await session.run()
    """

    def __init__(
        self,
        path: str,
        changes: list[ChangeRequest],
        fs: ProjectFileSystem,
        *,
        dry_run: bool = False,
        output_diff: bool = True,
        diff_context_lines: int = 3,
    ) -> None:
        self.path = path
        self.changes = list(changes)
        self.dry_run = dry_run
        self.output_diff = output_diff
        self.diff_context_lines = diff_context_lines
        self.state = SessionState.PENDING
        self.original_content: str | None = None
        self.final_content: str | None = None
        self.notes: list[str] = []
        self.applied = 0
        self._fs = fs

    def ordered_changes(self) -> list[ChangeRequest]:
        """Changes sorted by descending start_line (stable for equal anchors).

        Working from the bottom of the file upward means an edit never shifts
        the line numbers of edits still waiting above it.
        """
        return sorted(self.changes, key=lambda change: change.start_line, reverse=True)

    async def run(self) -> FileEditResult:
        """Drive the session to a terminal state and build its result record."""
        if self.state != SessionState.PENDING:
            raise RuntimeError(f"Edit session for {self.path} already ran (state: {self.state})")

        self.state = SessionState.READING
        try:
            absolute_path = self._fs.resolve_path(self.path)
            self.original_content = await self._fs.read_text(absolute_path, self.path)
        except EditError as e:
            return self._fail(str(e))

        if not self.changes:
            self.state = SessionState.SKIPPED
            return FileEditResult(path=self.path, status=EditStatus.SKIPPED)

        self.state = SessionState.APPLYING
        buffer = TextBuffer(self.original_content)
        applier = PatchApplier(buffer)
        try:
            for change in self.ordered_changes():
                if self._apply_change(change, buffer, applier):
                    self.applied += 1
        except MalformedPatternError as e:
            # Nothing is written: the file is left exactly as it was read
            return self._fail(str(e))

        self.state = SessionState.FINALIZING
        self.final_content = buffer.text

        if self.applied == 0:
            self.state = SessionState.SKIPPED
            return self._result(
                EditStatus.SKIPPED,
                f"No applicable changes found or made for {self.path}.",
            )

        diff = None
        if self.output_diff:
            diff = unified_diff(
                self.original_content,
                self.final_content,
                self.path,
                context_lines=self.diff_context_lines,
            )

        if self.dry_run:
            message = f"File {self.path} changes calculated (dry run)."
        else:
            try:
                await self._fs.write_text(absolute_path, self.path, self.final_content)
            except EditError as e:
                return self._fail(str(e))
            message = f"File {self.path} modified successfully."

        self.state = SessionState.SUCCEEDED
        logger.info(f"{message} {self.applied} applied, {len(self.notes)} skipped")
        return self._result(EditStatus.SUCCESS, message, diff)

    # ------------------------------------------------------------------
    # Single change
    # ------------------------------------------------------------------

    def _apply_change(
        self, change: ChangeRequest, buffer: TextBuffer, applier: PatchApplier
    ) -> bool:
        """Match and apply one change. Returns False if it was skipped.

        Raises:
            MalformedPatternError: Regex does not compile (aborts the file)
        """
        if change.is_insertion:
            assert change.replace_content is not None
            if applier.insert(
                change.start_line, change.replace_content, change.preserve_indentation
            ):
                return True
            return self._skip(
                f"Insertion at line {change.start_line} overlaps a previously applied change."
            )

        assert change.search_pattern is not None
        if change.use_regex:
            regex = compile_pattern(change.search_pattern, self.path)
            span = find_regex(buffer, regex, change.match_occurrence)
            if span is None:
                return self._skip(
                    f'Regex pattern "{change.search_pattern}" not found '
                    f"(occurrence {change.match_occurrence}) starting near line "
                    f"{change.start_line}."
                )
        else:
            span = find_plain(
                buffer,
                change.search_pattern,
                change.start_line,
                change.match_occurrence,
                change.ignore_leading_whitespace,
            )
            if span is None:
                return self._skip(
                    f"Search pattern not found (occurrence {change.match_occurrence}) "
                    f"starting near line {change.start_line}."
                )

        if change.is_deletion:
            applied = applier.delete(span)
        else:
            assert change.replace_content is not None
            applied = applier.replace(span, change.replace_content, change.preserve_indentation)

        if applied:
            return True
        return self._skip(
            f"Match for change at line {change.start_line} overlaps a previously applied change."
        )

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    def _skip(self, note: str) -> bool:
        logger.warning(f"{note} Skipping change in {self.path}.")
        self.notes.append(note)
        return False

    def _fail(self, message: str) -> FileEditResult:
        self.state = SessionState.FAILED
        logger.error(f"Edit failed for {self.path}: {message}")
        return FileEditResult(
            path=self.path,
            status=EditStatus.FAILED,
            message=message,
            changes_applied=0,
            changes_skipped=len(self.changes),
        )

    def _result(self, status: EditStatus, message: str, diff: str | None = None) -> FileEditResult:
        if self.notes:
            skipped = "; ".join(self.notes)
            message = f"{message} Skipped {len(self.notes)} change(s): {skipped}"
        return FileEditResult(
            path=self.path,
            status=status,
            message=message,
            diff=diff,
            changes_applied=self.applied,
            changes_skipped=len(self.notes),
        )
