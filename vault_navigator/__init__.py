"""Vault Navigator MCP Server

Search, read, link-graph traversal and note editing for Obsidian vaults via
Model Context Protocol.
"""

from vault_navigator.config import get_vault_configuration, resolve_vault
from vault_navigator.data_models import VaultConfiguration, VaultMetadata
from vault_navigator.server import main, mcp, run_server

# Import tools to register them with the MCP server
from vault_navigator import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "get_vault_configuration",
    "resolve_vault",
    "VaultMetadata",
    "VaultConfiguration",
    "mcp",
    "run_server",
    "main",
]
