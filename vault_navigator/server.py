"""FastMCP server initialization and tool registration."""

import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from mcp.server.fastmcp import FastMCP

from vault_navigator.config import TRANSPORTS, get_vault_configuration
from vault_navigator.constants import CONFIG_ENV_VAR, LOG_LEVEL, LOG_LEVEL_ENV_VAR

# Initialize logger
logging.basicConfig(level=os.getenv(LOG_LEVEL_ENV_VAR, LOG_LEVEL).upper())
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("vault_navigator")

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def run_server(
    transport: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Start the MCP server.

    Arguments left as ``None`` fall back to the ``server`` section of
    vaults.yaml (stdio unless configured otherwise).
    """
    settings = get_vault_configuration().server
    transport = transport or settings.transport

    if transport != "stdio":
        mcp.settings.host = host or settings.host
        mcp.settings.port = port or settings.port
        logger.info(
            "Starting Vault Navigator MCP Server on %s:%d (%s)",
            mcp.settings.host,
            mcp.settings.port,
            transport,
        )
    else:
        logger.info("Starting Vault Navigator MCP Server (stdio)")

    mcp.run(transport=transport)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="vault-navigator",
        description="Serve Obsidian vaults to MCP clients.",
    )
    parser.add_argument("--config", type=Path, help="Path to vaults.yaml")
    parser.add_argument("--transport", choices=sorted(TRANSPORTS), help="MCP transport")
    parser.add_argument("--host", help="Bind address for HTTP transports")
    parser.add_argument("--port", type=int, help="Port for HTTP transports")
    args = parser.parse_args(argv)

    if args.config is not None:
        os.environ[CONFIG_ENV_VAR] = str(args.config.expanduser())
        get_vault_configuration.cache_clear()

    run_server(transport=args.transport, host=args.host, port=args.port)

