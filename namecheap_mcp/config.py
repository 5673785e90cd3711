"""
Centralized configuration for the Namecheap MCP server.

All magic values, API URLs, and constants in one place.
Supports environment variable overrides for deployment flexibility.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError

# -----------------------------------------------------------------------------
# API Base URLs
# -----------------------------------------------------------------------------

NAMECHEAP_API_URL = os.environ.get(
    "NAMECHEAP_API_URL",
    "https://api.namecheap.com/xml.response",
)

NAMECHEAP_SANDBOX_API_URL = os.environ.get(
    "NAMECHEAP_SANDBOX_API_URL",
    "https://api.sandbox.namecheap.com/xml.response",
)

# -----------------------------------------------------------------------------
# HTTP Configuration
# -----------------------------------------------------------------------------

HTTP_TIMEOUT_SECONDS = 30.0

# -----------------------------------------------------------------------------
# Registrar Limits
# -----------------------------------------------------------------------------

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100

SUPPORTED_RECORD_TYPES: tuple[str, ...] = (
    "A",
    "AAAA",
    "CNAME",
    "MX",
    "TXT",
    "NS",
    "SRV",
    "CAA",
)

# -----------------------------------------------------------------------------
# Server Configuration
# -----------------------------------------------------------------------------

SERVER_NAME = "namecheap-mcp-server"
SERVER_VERSION = "1.0.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

LOG_LEVEL = os.environ.get("NAMECHEAP_LOG_LEVEL", "INFO").upper()

# -----------------------------------------------------------------------------
# Registrar Credentials
# -----------------------------------------------------------------------------

REQUIRED_ENV_VARS: tuple[str, ...] = (
    "NAMECHEAP_API_USER",
    "NAMECHEAP_API_KEY",
    "NAMECHEAP_USERNAME",
    "NAMECHEAP_CLIENT_IP",
)


class NamecheapConfig(BaseModel):
    """
    Credentials and endpoint selection for the registrar API.

    Built once per process and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    api_user: str
    api_key: str
    username: str
    client_ip: str
    sandbox: bool = False

    @property
    def api_url(self) -> str:
        return NAMECHEAP_SANDBOX_API_URL if self.sandbox else NAMECHEAP_API_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> NamecheapConfig:
        """
        Load configuration from environment variables.

        Raises:
            ConfigurationError: If any required variable is missing or blank.
        """
        env = os.environ if environ is None else environ
        values = {name: env.get(name, "").strip() for name in REQUIRED_ENV_VARS}

        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: " + ", ".join(missing)
            )

        return cls(
            api_user=values["NAMECHEAP_API_USER"],
            api_key=values["NAMECHEAP_API_KEY"],
            username=values["NAMECHEAP_USERNAME"],
            client_ip=values["NAMECHEAP_CLIENT_IP"],
            sandbox=env.get("NAMECHEAP_SANDBOX") == "true",
        )
