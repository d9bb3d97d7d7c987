"""Shared context types for MCP server.

This module contains context types used across server and tools modules,
separated to avoid circular imports.
"""

from dataclasses import dataclass

from mcp.server.fastmcp import Context
from mcp.server.session import ServerSession

from .engine import BatchEditor, EditorConfig, ProjectFileSystem


@dataclass
class AppContext:
    """Application context containing shared resources for MCP tools.

    This context is created during server startup and made available to all tools
    via dependency injection through the Context parameter.
    """

    config: EditorConfig
    file_system: ProjectFileSystem

    def create_batch_editor(self) -> BatchEditor:
        """Create a BatchEditor for one tool call.

        Editors hold no state between calls; a fresh one per call keeps every
        batch invocation independent.
        """
        return BatchEditor(self.file_system, diff_context_lines=self.config.diff_context_lines)


# Type alias for MCP tool context parameter
AppContextType = Context[ServerSession, AppContext]


__all__ = ["AppContext", "AppContextType"]
