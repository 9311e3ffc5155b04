# =============================================================================
# core/config.py  —  Server Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the n8n connection settings from the environment and returns them
#   as one immutable N8nConfig value.  The entry points call load_dotenv()
#   first, so a local .env file works too.
#
# ENVIRONMENT VARIABLES:
#   N8N_URL      →  base URL of the n8n instance (default http://localhost:5678)
#   N8N_API_KEY  →  API key sent as X-N8N-API-KEY (REQUIRED)
#   N8N_TIMEOUT  →  request timeout in seconds (default 30)
#   N8N_DEBUG    →  "true"/"1"/"yes"/"on" turns on request/response logging
#
# The config is passed explicitly into N8nClient and ToolDispatcher.  Tests
# build their own N8nConfig instead of patching the environment.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:5678"
DEFAULT_TIMEOUT_SECONDS = 30.0
API_PATH = "/api/v1"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class N8nConfig:
    """Connection settings for one n8n instance."""

    base_url: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    debug: bool = False

    @property
    def api_url(self) -> str:
        """Root of the public REST API, e.g. https://n8n.example.com/api/v1."""
        return self.base_url.rstrip("/") + API_PATH


def load_config(environ: Optional[Mapping[str, str]] = None) -> N8nConfig:
    """Build an N8nConfig from environment variables.

    Raises:
        ConfigurationError: if N8N_API_KEY is missing or N8N_TIMEOUT is not
            a positive number.
    """
    env = os.environ if environ is None else environ

    api_key = env.get("N8N_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("N8N_API_KEY environment variable is required")

    base_url = env.get("N8N_URL", "").strip() or DEFAULT_BASE_URL

    raw_timeout = env.get("N8N_TIMEOUT", "").strip()
    timeout = DEFAULT_TIMEOUT_SECONDS
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"N8N_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigurationError(f"N8N_TIMEOUT must be positive, got {raw_timeout!r}")

    debug = env.get("N8N_DEBUG", "").strip().lower() in _TRUTHY

    return N8nConfig(base_url=base_url, api_key=api_key, timeout=timeout, debug=debug)
