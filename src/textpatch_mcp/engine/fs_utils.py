"""File-system collaborators for the edit engine.

The edit engine never touches the file system directly. It consumes:
- path resolution with project-root containment (PathResolver)
- text read/write/exists primitives (FileOperations)

PathResolver and FileOperations return IOResult values instead of raising.
ProjectFileSystem is the async facade the edit session awaits: it runs the
blocking calls on the default executor and converts failed results into the
engine's exception taxonomy.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .exceptions import FileIOError, FileMissingError, InvalidPathError
from .io_result import IOResult, IOStatus

logger = logging.getLogger(__name__)


class PathResolver:
    """Path resolution with project-root containment.

    Rejects:
    - absolute paths (callers always address files relative to the project)
    - paths that escape the project root after normalization (../ sequences,
      symlinked parents pointing outside the root)
    """

    @staticmethod
    def resolve_and_validate(path: str, project_root: Path) -> IOResult[Path]:
        """Resolve a relative path against the project root.

        Args:
            path: Relative file path supplied by the caller
            project_root: Directory every resolved path must stay within

        Returns:
            IOResult.success(resolved_path) or IOResult.invalid_path(error_message)

        Example:
            result = PathResolver.resolve_and_validate("src/app.py", Path("/work"))
            if result.is_success:
                target = result.value
        """
        if not path:
            return IOResult.invalid_path("Path must not be empty")
        if "\x00" in path:
            return IOResult.invalid_path("Path contains a null byte")

        file_path = Path(path)
        if file_path.is_absolute():
            return IOResult.invalid_path(f"Absolute paths are not allowed: {path}")

        root = project_root.resolve()
        try:
            resolved_path = (root / file_path).resolve()
        except (OSError, RuntimeError, ValueError) as e:
            return IOResult.invalid_path(f"Failed to resolve path '{path}': {e}")

        try:
            resolved_path.relative_to(root)
        except ValueError:
            return IOResult.invalid_path(
                f"Path escapes project root. Path: {path}, Resolved: {resolved_path}, "
                f"Project root: {root}"
            )

        return IOResult.success(resolved_path)


class FileOperations:
    """Text file I/O returning IOResult values.

    Reads and writes use newline="" so line endings are preserved exactly:
    the edit engine splits on "\\n" itself and a "\\r\\n" file must be written
    back with its carriage returns intact.
    """

    @staticmethod
    def exists(path: Path) -> bool:
        """Return True if path exists (file or directory)."""
        return path.exists()

    @staticmethod
    def read_text(
        path: Path,
        encoding: str = "utf-8",
        max_size_bytes: int | None = None,
    ) -> IOResult[str]:
        """Read text file with error handling.

        Args:
            path: File path to read
            encoding: Text encoding (default: utf-8)
            max_size_bytes: Optional size limit (prevents memory exhaustion)

        Returns:
            IOResult.success(content), IOResult.not_found(...) for a missing
            file, or IOResult.failure(...) for anything else
        """
        if not FileOperations.exists(path):
            return IOResult.not_found(f"File not found: {path}")

        if not path.is_file():
            return IOResult.failure(f"Path is not a file: {path}")

        if max_size_bytes is not None:
            try:
                file_size = path.stat().st_size
            except OSError as e:
                return IOResult.failure(f"Failed to stat file '{path}': {e}")
            if file_size > max_size_bytes:
                return IOResult.failure(
                    f"File too large: {file_size} bytes exceeds limit of {max_size_bytes}"
                )

        try:
            with open(path, encoding=encoding, newline="") as f:
                return IOResult.success(f.read())
        except FileNotFoundError:
            # Removed between the exists() check and open()
            return IOResult.not_found(f"File not found: {path}")
        except UnicodeDecodeError as e:
            return IOResult.failure(f"Encoding error reading '{path}' with {encoding}: {e}")
        except OSError as e:
            return IOResult.failure(f"Failed to read file '{path}': {e}")

    @staticmethod
    def write_text(path: Path, content: str, encoding: str = "utf-8") -> IOResult[int]:
        """Write text file with error handling.

        Parent directories are not created: the edit engine only rewrites
        files it has just read.

        Returns:
            IOResult.success(bytes_written) or IOResult.failure(error_message)
        """
        try:
            with open(path, "w", encoding=encoding, newline="") as f:
                f.write(content)
        except UnicodeEncodeError as e:
            return IOResult.failure(f"Encoding error writing '{path}' with {encoding}: {e}")
        except OSError as e:
            return IOResult.failure(f"Failed to write file '{path}': {e}")

        return IOResult.success(len(content.encode(encoding)))


class ProjectFileSystem:
    """Async file-system facade rooted at a project directory.

    Usage:
        fs = ProjectFileSystem(Path("/work/project"))
        target = fs.resolve_path("src/app.py")
        content = await fs.read_text(target, "src/app.py")
        await fs.write_text(target, "src/app.py", new_content)
    """

    def __init__(
        self,
        project_root: Path,
        encoding: str = "utf-8",
        max_file_size_bytes: int | None = None,
    ) -> None:
        self.project_root = project_root
        self.encoding = encoding
        self.max_file_size_bytes = max_file_size_bytes

    def resolve_path(self, relative_path: str) -> Path:
        """Resolve a caller-supplied relative path.

        Raises:
            InvalidPathError: Absolute path, traversal outside the root, or
                unresolvable path
        """
        result = PathResolver.resolve_and_validate(relative_path, self.project_root)
        if result.is_failure:
            raise InvalidPathError(relative_path, result.error or "invalid path")
        return result.unwrap()

    async def read_text(self, path: Path, display_path: str) -> str:
        """Read a file's full text.

        Args:
            path: Resolved absolute path
            display_path: Caller-facing relative path used in error messages

        Raises:
            FileMissingError: File does not exist
            FileIOError: Any other read failure
        """

        def _read() -> IOResult[str]:
            return FileOperations.read_text(path, self.encoding, self.max_file_size_bytes)

        loop = asyncio.get_event_loop()
        result = await loop.run_in_executor(None, _read)

        if result.status == IOStatus.NOT_FOUND:
            raise FileMissingError(display_path)
        if result.is_failure:
            raise FileIOError(display_path, result.error or "read failed")
        return result.unwrap()

    async def write_text(self, path: Path, display_path: str, content: str) -> int:
        """Overwrite a file with new text.

        Raises:
            FileIOError: Write failed
        """

        def _write() -> IOResult[int]:
            return FileOperations.write_text(path, content, self.encoding)

        loop = asyncio.get_event_loop()
        result = await loop.run_in_executor(None, _write)

        if result.is_failure:
            raise FileIOError(display_path, result.error or "write failed")
        bytes_written = result.unwrap()
        logger.debug(f"Wrote {bytes_written} bytes to {path}")
        return bytes_written
