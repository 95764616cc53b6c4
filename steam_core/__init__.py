# =============================================================================
# steam_core/__init__.py
# =============================================================================
# This package contains the tool dispatch engine for the Steam gateway.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any protocol framework.
#   The engine takes a tool name plus raw arguments and always hands back
#   exactly one CallResult (Success or Failure).  The steam_tools/ layer
#   is just the wiring that connects that engine to an MCP caller.
#
# LAYERS (leaves first):
#   models.py       → envelopes, error taxonomy, validated argument types
#   validation.py   → one argument parser per tool
#   steam_client.py → the HTTP GETs against the Steam Web API
#   invocation.py   → single-call and fan-out strategies
#   catalog.py      → the ten tool contracts, in registration order
#   errors.py       → exception types and the error classifier
#   responses.py    → success normalisation and envelope rendering
#   dispatcher.py   → the root: validate → invoke → normalise / classify
# =============================================================================
