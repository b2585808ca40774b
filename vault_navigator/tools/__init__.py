"""MCP tool definitions for vault operations.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from vault_navigator.tools import note_tools
from vault_navigator.tools import search_tools
from vault_navigator.tools import graph_tools

__all__ = [
    "note_tools",
    "search_tools",
    "graph_tools",
]
