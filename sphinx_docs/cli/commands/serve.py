"""Serve command - starts the MCP server."""

import logging

from ..config import Config

logger = logging.getLogger(__name__)


def serve_command(config: Config, verbose: bool = False):
    """Start the MCP server on stdio."""
    if verbose:
        logger.info(f"🚀 Starting {config.mcp_server_name}...")
        logger.info(f"🧩 Default chunk size: {config.chunk_size} words")

    from ...mcp_server.server import start_server

    start_server(config)
