"""textpatch-mcp: batch line-anchored file editing over MCP."""

__version__ = "0.1.0"
