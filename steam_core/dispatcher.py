# =============================================================================
# steam_core/dispatcher.py  —  The Dispatcher (root of the engine)
# =============================================================================
#
# Per call:
#
#   Received ──▶ Validating ──▶ Invoking ──▶ Normalizing ──▶ Responded
#      │             │             │
#      └─────────────┴─────────────┴──▶ Classifying ──▶ Responded
#
# An unknown tool name is classified straight from Received, so no
# validator runs.  Whatever happens, call_tool() returns exactly one
# CallResult and never raises (cancellation excepted).
#
# list_tools() bypasses all of that and returns the static metadata of
# every registered contract, in registration order.
# =============================================================================

import logging
from collections.abc import Mapping
from typing import Any, Optional

from steam_core.catalog import build_registry
from steam_core.errors import UnknownToolError, classify
from steam_core.models import CallRequest, CallResult, ErrorKind, Failure, ToolContract
from steam_core.responses import normalize

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes tool calls through validate → invoke → normalize."""

    def __init__(self, client: Any, registry: Optional[Mapping[str, ToolContract]] = None) -> None:
        self.client = client
        self.registry = dict(registry) if registry is not None else build_registry()

    def list_tools(self) -> list[dict[str, Any]]:
        return [contract.describe() for contract in self.registry.values()]

    async def dispatch(self, request: CallRequest) -> CallResult:
        return await self.call_tool(request.tool_name, request.arguments)

    async def call_tool(self, tool_name: str, arguments: Any = None) -> CallResult:
        contract = self.registry.get(tool_name)
        if contract is None:
            return self._fail(UnknownToolError(tool_name), tool_name, arguments)

        try:
            logger.debug("%s: validating", tool_name)
            validated = contract.validate(arguments)
            logger.debug("%s: invoking with %r", tool_name, validated)
            payload = await contract.invoke(self.client, validated)
        except Exception as exc:
            return self._fail(exc, tool_name, arguments)

        logger.debug("%s: normalizing", tool_name)
        return normalize(payload)

    def _fail(self, error: Exception, tool_name: str, arguments: Any) -> Failure:
        failure = classify(error, tool_name, arguments)
        if failure.kind is ErrorKind.INTERNAL_ERROR:
            logger.error("[%s Error] %s", tool_name, failure.message, exc_info=error)
        else:
            logger.warning("[%s Error] %s: %s", tool_name, failure.kind.value, failure.message)
        return failure
