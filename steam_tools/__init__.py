# =============================================================================
# steam_tools/__init__.py
# =============================================================================
# This package contains the FastMCP wiring for the Steam gateway.
#
# ARCHITECTURAL ROLE:
#   steam_tools/ is the translation layer between an MCP caller and the
#   dispatch engine in steam_core/.  It:
#     1. Registers one FastMCP tool per ToolContract in the catalog
#     2. Hands each call to the Dispatcher unchanged
#     3. Renders the resulting CallResult as JSON text for the protocol
#
# WHAT THIS LAYER DOES NOT DO:
#   - It does NOT validate arguments (each contract's validator does)
#   - It does NOT talk to Steam (SteamClient does)
#   - It does NOT decide what counts as an error (the classifier does)
# =============================================================================
