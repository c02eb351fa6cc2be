"""
archscribe MCP server: classifier tools over stdio.
"""

from .server import MCPServerApp, main

__all__ = ["MCPServerApp", "main"]
