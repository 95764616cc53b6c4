# =============================================================================
# steam_tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes every ToolContract from steam_core.catalog as an MCP tool.  Each
#   tool is a thin DispatchedTool: it passes the raw arguments to the
#   Dispatcher and renders whatever CallResult comes back.
#
# HOW IT WORKS (the flow):
#   1. The MCP caller lists tools → FastMCP returns name, description and
#      inputSchema for each contract, in registration order
#   2. The caller invokes a tool by name (e.g., "getCurrentPlayers")
#   3. DispatchedTool.run() calls Dispatcher.call_tool()
#   4. Success → JSON text of {"success": true, "data": ...}
#      Failure → an MCP error result whose text is the failure envelope
#
# OUTPUT SCHEMAS:
#   The full contract metadata, output schemas included, is published as the
#   read-only resource steam://tools.  Output schemas are not attached to the
#   MCP tools themselves: a failure envelope never matches them.
#
# RUNNING THIS SERVER:
#   python main.py            (or the `steam-mcp-server` console script)
#   The caller talks to it over stdio.
# =============================================================================

import copy
import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.tools import Tool, ToolResult
from pydantic import PrivateAttr

from steam_core.config import SteamSettings
from steam_core.dispatcher import Dispatcher
from steam_core.models import ToolContract
from steam_core.responses import is_failure, render
from steam_core.steam_client import SteamClient

SERVER_NAME = "steam-mcp-server"
SERVER_INSTRUCTIONS = "MCP Server for interacting with the Steam Web API"
CATALOG_URI = "steam://tools"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its caller over STDOUT.
# A log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + arguments)
#     - GREEN for response summaries
#     - YELLOW for status messages (including classified failures)
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

# Response bodies can be huge (getAppList); only this much is echoed.
_RESPONSE_PREVIEW_CHARS = 200


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, arguments: Any) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    if isinstance(arguments, dict):
        param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    else:
        param_str = repr(arguments)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log a compact preview of the response in GREEN, then return it."""
    preview = " ".join(text.split())[:_RESPONSE_PREVIEW_CHARS]
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {preview}{_RESET}")
    return text


# =============================================================================
# DispatchedTool — one FastMCP tool backed by the Dispatcher
# =============================================================================
# The tool's parameters are the contract's inputSchema verbatim.  FastMCP
# does no argument checking for custom Tool subclasses, so the contract's
# own validator is the only one that runs.
# =============================================================================
class DispatchedTool(Tool):
    _dispatcher: Optional[Dispatcher] = PrivateAttr(default=None)

    @classmethod
    def from_contract(cls, contract: ToolContract, dispatcher: Dispatcher) -> "DispatchedTool":
        tool = cls(
            name=contract.name,
            description=contract.description,
            parameters=copy.deepcopy(contract.input_schema),
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments)
        result = await self._dispatcher.call_tool(self.name, arguments)
        text = render(result)

        # A failure is still a normal tool result, flagged isError for the caller.
        if is_failure(result):
            _log_status(f"{self.name} failed with {result.kind.value}: {result.message}")
            return ToolResult(content=text, is_error=True)

        return ToolResult(content=_log_response(self.name, text))


# =============================================================================
# Server factory
# =============================================================================
def create_server(
    settings: SteamSettings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Build the FastMCP server: one tool per contract plus the catalog resource.

    `transport` replaces the real network (tests pass an httpx.MockTransport).
    Every time the lifespan starts it opens a fresh HTTP client, and it closes
    that client when the lifespan ends.
    """
    dispatcher = Dispatcher(client=None)

    @asynccontextmanager
    async def lifespan(server):
        async with SteamClient(settings, transport=transport) as client:
            dispatcher.client = client
            try:
                yield {}
            finally:
                dispatcher.client = None

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, lifespan=lifespan)

    for contract in dispatcher.registry.values():
        mcp.add_tool(DispatchedTool.from_contract(contract, dispatcher))

    @mcp.resource(
        CATALOG_URI,
        name="tool-catalog",
        description="Name, description, inputSchema and outputSchema of every Steam tool.",
        mime_type="application/json",
    )
    def tool_catalog() -> str:
        return json.dumps(dispatcher.list_tools(), indent=2)

    logging.getLogger(__name__).debug(
        "registered tools: %s", ", ".join(dispatcher.registry)
    )
    return mcp
