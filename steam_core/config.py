# =============================================================================
# steam_core/config.py  —  Process-wide Settings
# =============================================================================
#
# The Steam Web API key is the only secret the gateway needs.  It is read
# once at startup (from the environment or a .env file), frozen into a
# SteamSettings value, and passed to SteamClient.  Nothing mutates it later.
#
# ENVIRONMENT VARIABLES:
#   STEAM_API_KEY         required; startup fails without it
#   STEAM_API_BASE_URL    default https://api.steampowered.com
#   STEAM_STORE_BASE_URL  default https://store.steampowered.com
#   STEAM_HTTP_TIMEOUT    seconds; unset means httpx's own default
#   LOG_LEVEL             default INFO
# =============================================================================

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://api.steampowered.com"
DEFAULT_STORE_BASE_URL = "https://store.steampowered.com"


class ConfigurationError(Exception):
    """Raised when the process cannot start with the given environment."""


@dataclass(frozen=True)
class SteamSettings:
    api_key: str = field(repr=False)
    api_base_url: str = DEFAULT_API_BASE_URL
    store_base_url: str = DEFAULT_STORE_BASE_URL
    timeout: Optional[float] = None
    log_level: str = "INFO"


def load_settings(dotenv_path: Optional[str] = None) -> SteamSettings:
    """Build SteamSettings from the environment, loading .env first.

    Variables already present in the environment win over the .env file.
    A missing .env file is fine; a missing STEAM_API_KEY is not.
    """
    load_dotenv(dotenv_path)

    api_key = os.environ.get("STEAM_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("STEAM_API_KEY environment variable is not set.")

    raw_timeout = os.environ.get("STEAM_HTTP_TIMEOUT", "").strip()
    timeout = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"STEAM_HTTP_TIMEOUT must be a number of seconds, got {raw_timeout!r}."
            ) from None

    return SteamSettings(
        api_key=api_key,
        api_base_url=os.environ.get("STEAM_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        store_base_url=os.environ.get("STEAM_STORE_BASE_URL", DEFAULT_STORE_BASE_URL).rstrip("/"),
        timeout=timeout,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
