"""MCP server exposing a preview session."""

from adpreview.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
