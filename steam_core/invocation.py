# =============================================================================
# steam_core/invocation.py  —  Upstream Invocation Strategies
# =============================================================================
#
# A tool contract's `invoke` is one of two strategies:
#
#   SingleCall  → one GET with a deterministic parameter mapping, followed by
#                 the tool's own success oracle.  Steam signals failure in
#                 several different ways (result code, boolean flag, missing
#                 key), so each contract brings its own predicate.
#
#   FanOutCall  → one GET per item key, all issued concurrently, joined with
#                 gather_settled().  Every key gets an entry in the merged
#                 PartialBatchResult; one failing key never cancels or fails
#                 its siblings.
#
# Both call `client.get_api` (API key attached) when authenticated, and
# `client.get_store` (public storefront, no key) otherwise.
# =============================================================================

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

import httpx

from steam_core.errors import UpstreamShapeError, describe_transport_error
from steam_core.models import PartialBatchResult

logger = logging.getLogger(__name__)


def _no_params(args: Any) -> dict[str, Any]:
    return {}


def _always(payload: Any) -> bool:
    return True


def _generic_failure(args: Any, payload: Any) -> str:
    return "Steam API response is missing its success indicator."


def dig(payload: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def present(value: Any) -> bool:
    """JSON truthiness: any object or array is present, as is any other truthy value."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _fetcher(client: Any, authenticated: bool):
    return client.get_api if authenticated else client.get_store


# =============================================================================
# SingleCall
# =============================================================================
@dataclass(frozen=True)
class SingleCall:
    path: str
    params: Callable[[Any], dict[str, Any]] = _no_params
    succeeded: Callable[[Any], bool] = _always
    failure_message: Callable[[Any, Any], str] = _generic_failure
    authenticated: bool = True

    async def __call__(self, client: Any, args: Any) -> Any:
        payload = await _fetcher(client, self.authenticated)(self.path, self.params(args))
        if not self.succeeded(payload):
            raise UpstreamShapeError(self.failure_message(args, payload), payload=payload)
        return payload


# =============================================================================
# gather_settled — "wait for all, never short-circuit"
# =============================================================================
@dataclass(frozen=True)
class Settled:
    key: Any
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(
    keys: Iterable[Any],
    fetch: Callable[[Any], Awaitable[Any]],
) -> list[Settled]:
    """Run fetch(key) for every key concurrently and report each outcome.

    Exceptions are captured per branch, so the join only returns once every
    branch has finished, whatever happened to its siblings.
    """
    keys = list(keys)
    outcomes = await asyncio.gather(*(fetch(key) for key in keys), return_exceptions=True)
    return [
        Settled(key=key, error=outcome) if isinstance(outcome, BaseException) else Settled(key=key, value=outcome)
        for key, outcome in zip(keys, outcomes)
    ]


# =============================================================================
# FanOutCall
# =============================================================================
# `item_result(key, payload)` turns one upstream body into that key's entry
# and reports upstream-level failures (e.g. "not found") inside the entry
# rather than raising.  Transport failures are converted here.
# =============================================================================
@dataclass(frozen=True)
class FanOutCall:
    path: str
    keys: Callable[[Any], Sequence[Any]]
    params: Callable[[Any, Any], dict[str, Any]]
    item_result: Callable[[Any, Any], dict[str, Any]]
    item_label: str = "item"
    authenticated: bool = True

    async def __call__(self, client: Any, args: Any) -> PartialBatchResult:
        # Duplicate keys collapse onto one entry, so fetch each distinct key once.
        keys = list(dict.fromkeys(self.keys(args)))
        fetch = _fetcher(client, self.authenticated)

        async def fetch_one(key: Any) -> Any:
            return await fetch(self.path, self.params(args, key))

        merged: PartialBatchResult = {}
        for outcome in await gather_settled(keys, fetch_one):
            if outcome.ok:
                merged[str(outcome.key)] = self.item_result(outcome.key, outcome.value)
            else:
                message = self._describe_failure(outcome.key, outcome.error)
                logger.warning("fan-out %s=%s failed: %s", self.item_label, outcome.key, message)
                merged[str(outcome.key)] = {"success": False, "error": message}
        return merged

    def _describe_failure(self, key: Any, error: BaseException) -> str:
        prefix = f"Failed to fetch details for {self.item_label} {key}"
        if isinstance(error, httpx.HTTPStatusError):
            return f"{prefix}: Steam API request failed (Status: {error.response.status_code})"
        if isinstance(error, httpx.HTTPError):
            return f"{prefix}: {describe_transport_error(error)}"
        return f"{prefix}: {type(error).__name__}: {error}"


def embedded_failure(label: str, key: Any, data: Any) -> dict[str, Any]:
    """Entry for an item whose upstream body reported failure."""
    return {
        "success": False,
        "error": f"Steam API reported failure for {label} {key}. Data: {json.dumps(data)}",
    }
