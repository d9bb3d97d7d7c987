"""Edit engine exceptions.

Propagation policy:
- InvalidEditRequestError is fatal to the whole batch call
- every other EditError is isolated to the file it was raised for
"""

from __future__ import annotations


class EditError(Exception):
    """Base class for all edit engine errors."""


class InvalidEditRequestError(EditError):
    """
    The edit request itself is structurally invalid.

    Raised before any file is touched. The caller receives no partial batch
    result.

    Attributes:
        details: Flattened "field.path: message" descriptions of each problem
    """

    def __init__(self, details: list[str]):
        self.details = details
        super().__init__(f"Invalid arguments for edit_file: {'; '.join(details)}")


class InvalidPathError(EditError):
    """Path is absolute, escapes the project root, or cannot be resolved."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path '{path}': {reason}")


class FileMissingError(EditError):
    """Target file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class FileIOError(EditError):
    """Read or write failure other than a missing file."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Filesystem error processing {path}: {reason}")


class MalformedPatternError(EditError):
    """
    Regular expression in a change request cannot be compiled.

    Aborts processing of the file the change belongs to; other files in the
    batch are unaffected.

    Attributes:
        pattern: The pattern source as supplied by the caller
        path: Relative path of the file being edited
        reason: Diagnostic from the regex compiler
    """

    def __init__(self, pattern: str, path: str, reason: str):
        self.pattern = pattern
        self.path = path
        self.reason = reason
        super().__init__(f'Invalid regex pattern "{pattern}" in {path}: {reason}')

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"MalformedPatternError(pattern={self.pattern!r}, path={self.path!r})"
