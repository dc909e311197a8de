"""Logging setup for the CLI and the MCP server.

All output goes to stderr: the MCP server speaks JSON-RPC over stdout, and
the ``chunk``/``analyze`` commands print their JSON results there.
"""

import logging
import sys

# Third-party loggers that would otherwise echo every crawled request
NOISY_LOGGERS = ["urllib3", "charset_normalizer"]


def setup_logging(verbose: bool = False):
    """Log to stderr at INFO for the CLI, ERROR only for the MCP server."""
    level = logging.INFO if verbose else logging.ERROR
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
