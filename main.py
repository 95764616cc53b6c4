# =============================================================================
# main.py  —  Entry Point for the Steam MCP Server
# =============================================================================
#
# HOW TO RUN:
#   STEAM_API_KEY=... python main.py
#   (or put STEAM_API_KEY in a .env file next to this one)
#
# WHAT HAPPENS:
#   1. Settings are loaded from the environment / .env (steam_core/config.py)
#   2. Logging is pointed at stderr
#   3. The FastMCP server is built (steam_tools/mcp_server.py)
#   4. The server talks MCP over stdin/stdout until the caller disconnects
#
# A missing STEAM_API_KEY is fatal: the process prints the reason to stderr
# and exits with status 1 before the server starts.
# =============================================================================

import logging
import signal
import sys

from steam_core.config import ConfigurationError, load_settings
from steam_tools.mcp_server import configure_logging, create_server


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"FATAL ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    server = create_server(settings)

    # SIGTERM gets the same clean shutdown path as Ctrl+C.
    signal.signal(signal.SIGTERM, signal.default_int_handler)

    logging.info("Steam MCP server running on stdio")
    try:
        server.run()
    except KeyboardInterrupt:
        logging.info("Steam MCP server shutting down")


if __name__ == "__main__":
    main()
