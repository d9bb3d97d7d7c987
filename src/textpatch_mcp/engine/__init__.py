"""Batch text-patching engine.

Public API:
- BatchEditor: apply a batch of change requests across files
- EditSession: one file's read -> match/patch -> finalize lifecycle
- ProjectFileSystem: project-rooted path resolution and file I/O
- Models: ChangeRequest, EditFileArgs, FileEditResult, EditFileResult, EditStatus
"""

from .batch import BatchEditor, group_by_path
from .config import EditorConfig, EditorConfigLoader
from .diff import apply_unified_diff, unified_diff
from .edit_session import EditSession, SessionState
from .exceptions import (
    EditError,
    FileIOError,
    FileMissingError,
    InvalidEditRequestError,
    InvalidPathError,
    MalformedPatternError,
)
from .fs_utils import FileOperations, PathResolver, ProjectFileSystem
from .io_result import IOResult, IOStatus
from .matcher import MatchSpan, compile_pattern, find_plain, find_regex
from .models import ChangeRequest, EditFileArgs, EditFileResult, EditStatus, FileEditResult
from .patch_applier import PatchApplier
from .text_buffer import TextBuffer, TextEdit

__all__ = [
    # Coordination
    "BatchEditor",
    "group_by_path",
    "EditSession",
    "SessionState",
    # Matching and patching
    "TextBuffer",
    "TextEdit",
    "MatchSpan",
    "find_plain",
    "find_regex",
    "compile_pattern",
    "PatchApplier",
    # Diffs
    "unified_diff",
    "apply_unified_diff",
    # Models
    "ChangeRequest",
    "EditFileArgs",
    "EditFileResult",
    "EditStatus",
    "FileEditResult",
    # Collaborators
    "ProjectFileSystem",
    "PathResolver",
    "FileOperations",
    "IOResult",
    "IOStatus",
    # Configuration
    "EditorConfig",
    "EditorConfigLoader",
    # Errors
    "EditError",
    "InvalidEditRequestError",
    "InvalidPathError",
    "FileMissingError",
    "FileIOError",
    "MalformedPatternError",
]
