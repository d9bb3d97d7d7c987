"""FastMCP server initialization for textpatch-mcp.

This module initializes the MCP server and manages shared resources via lifespan context.
All tool implementations are in the tools module.

Following the official Anthropic Python SDK patterns:
- Lifespan context manager for resource initialization and cleanup
- Context injection for tool access to shared resources
- FastMCP server with stdio transport
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from .context import AppContext, AppContextType
from .engine import EditorConfigLoader, ProjectFileSystem

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# =============================================================================
# Shared Resources and Lifespan Management
# =============================================================================


def create_app_context(config_loader: EditorConfigLoader | None = None) -> AppContext:
    """Load configuration and build the shared file-system facade.

    Args:
        config_loader: Loader to use (defaults to environment/standard locations)

    Returns:
        AppContext ready to serve tool calls

    Raises:
        ValueError: Configuration file or values are invalid
    """
    loader = config_loader or EditorConfigLoader()
    config = loader.load_config()

    file_system = ProjectFileSystem(
        project_root=config.project_root,
        encoding=config.encoding,
        max_file_size_bytes=config.max_file_size_bytes,
    )
    return AppContext(config=config, file_system=file_system)


@asynccontextmanager
async def app_lifespan(_server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage application lifecycle.

    Environment Variables:
        TEXTPATCH_CONFIG: Path to YAML config file
        TEXTPATCH_PROJECT_ROOT: Directory edits are confined to (default: cwd)

    Args:
        _server: FastMCP server instance (unused, required by FastMCP signature)

    Yields:
        AppContext with initialized resources
    """
    logger.info("Initializing MCP server resources...")

    app_context = create_app_context()
    logger.info(
        f"Editing files under {app_context.config.project_root} "
        f"(encoding: {app_context.config.encoding}, "
        f"diff context: {app_context.config.diff_context_lines} lines)"
    )

    try:
        yield app_context
    finally:
        # No explicit cleanup: edit sessions hold no resources between calls
        logger.info("Shutting down MCP server...")


# Initialize MCP server with lifespan management
# Following Python MCP naming convention: {service}_mcp
mcp = FastMCP("textpatch_mcp", lifespan=app_lifespan)


# =============================================================================
# Server Entry Point
# =============================================================================


def configure_logging() -> None:
    """Configure logging to stderr (MCP requirement) from TEXTPATCH_LOG_LEVEL."""
    log_level_str = os.getenv("TEXTPATCH_LOG_LEVEL", "INFO").upper()

    if log_level_str not in VALID_LOG_LEVELS:
        print(
            f"Warning: Invalid TEXTPATCH_LOG_LEVEL '{log_level_str}'. "
            f"Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}. "
            "Using INFO.",
            file=sys.stderr,
        )
        log_level_str = "INFO"

    logging.basicConfig(
        level=getattr(logging, log_level_str),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Entry point for running the MCP server.

    This function is called when the server is run directly via:
    - python -m textpatch_mcp
    - textpatch-mcp (console script)

    Defaults to stdio transport for MCP protocol communication.
    """
    configure_logging()
    logger.info("Starting MCP server (press Ctrl+C to stop)...")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down gracefully...")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)

    logger.info("Server shutdown complete")


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "mcp",
    "main",
    "AppContext",
    "AppContextType",
    "create_app_context",
    "configure_logging",
]
