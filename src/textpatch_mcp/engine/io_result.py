"""IOResult for file-system collaborator operations.

This is a specialized error monad used by the path resolution and file I/O
layer. It is NOT used by the edit engine itself: the engine works with
exceptions, and ProjectFileSystem converts failed results into them.

The status distinguishes the failure conditions the edit session reports
differently (missing file vs. rejected path vs. any other I/O failure).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class IOStatus(str, Enum):
    """Status of a file-system operation.

    Using a discriminated union pattern ensures type safety by preventing
    invalid state combinations.
    """

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    INVALID_PATH = "invalid_path"
    FAILED = "failed"


@dataclass
class IOResult(Generic[T]):  # noqa: UP046
    """
    IOResult for safe file-system operations (collaborator layer).

    Usage:
        read_result = FileOperations.read_text(path)
        if read_result.is_success:
            content = read_result.value
        elif read_result.status == IOStatus.NOT_FOUND:
            ...
    """

    status: IOStatus
    value: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate state consistency after initialization.

        - SUCCESS results must have a value
        - every other status must carry an error message
        """
        if self.status == IOStatus.SUCCESS and self.value is None:
            raise ValueError("Success result must have a value")
        if self.status != IOStatus.SUCCESS and not self.error:
            raise ValueError(f"{self.status.value} result must have an error message")

    @property
    def is_success(self) -> bool:
        """Check if the operation was successful."""
        return self.status == IOStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the operation did not complete, for any reason."""
        return self.status != IOStatus.SUCCESS

    @classmethod
    def success(cls, value: T) -> "IOResult[T]":
        """Create a successful result."""
        return cls(status=IOStatus.SUCCESS, value=value)

    @classmethod
    def not_found(cls, error: str) -> "IOResult[T]":
        """Create a result for a file that does not exist."""
        return cls(status=IOStatus.NOT_FOUND, error=error)

    @classmethod
    def invalid_path(cls, error: str) -> "IOResult[T]":
        """Create a result for a path rejected by validation."""
        return cls(status=IOStatus.INVALID_PATH, error=error)

    @classmethod
    def failure(cls, error: str) -> "IOResult[T]":
        """Create a failed result.

        Use this for any I/O failure other than a missing file or rejected path
        (permission denied, encoding errors, size limits, ...).
        """
        return cls(status=IOStatus.FAILED, error=error)

    def unwrap(self) -> T:
        """Get value or raise exception if failed."""
        if not self.is_success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        if self.value is None:
            raise ValueError("Cannot unwrap result: value is None")
        return self.value
