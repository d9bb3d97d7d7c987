"""Shared test configuration for textpatch-mcp tests.

Provides:
- A temporary project root with helpers to create and read files
- A ProjectFileSystem and BatchEditor rooted at that directory
- A stand-in MCP tool context carrying an AppContext
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from textpatch_mcp.context import AppContext
from textpatch_mcp.engine import BatchEditor, EditorConfig, ProjectFileSystem


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of config tests."""
    for name in ("TEXTPATCH_CONFIG", "TEXTPATCH_PROJECT_ROOT", "TEXTPATCH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project root every edited path is resolved against."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project_dir: Path) -> Callable[[str, str], Path]:
    """Create a file under the project root with exact bytes (no newline translation)."""

    def _write(relative_path: str, content: str) -> Path:
        path = project_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def read_file(project_dir: Path) -> Callable[[str], str]:
    """Read a file under the project root with exact bytes."""

    def _read(relative_path: str) -> str:
        return (project_dir / relative_path).read_bytes().decode("utf-8")

    return _read


@pytest.fixture
def file_system(project_dir: Path) -> ProjectFileSystem:
    return ProjectFileSystem(project_dir)


@pytest.fixture
def batch_editor(file_system: ProjectFileSystem) -> BatchEditor:
    return BatchEditor(file_system)


@pytest.fixture
def app_context(project_dir: Path, file_system: ProjectFileSystem) -> AppContext:
    return AppContext(config=EditorConfig(project_root=project_dir), file_system=file_system)


@pytest.fixture
def tool_ctx(app_context: AppContext) -> MagicMock:
    """Minimal stand-in for the MCP Context injected into tools."""
    ctx = MagicMock()
    ctx.request_context.lifespan_context = app_context
    return ctx
