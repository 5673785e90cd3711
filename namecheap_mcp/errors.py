"""
Gateway Failure Types

Canonical failure taxonomy for the Namecheap MCP server.
All failures raised or returned by the gateway MUST be instances of these types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RegistrarError


class GatewayFailure(Exception):
    """Base class for all gateway failures."""

    failure_category: str = "unknown"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ContractViolation(GatewayFailure):
    """
    The request violates MCP protocol requirements.

    - Fatality: Fatal to the request. Never reaches the registrar.
    - MCP Representation: JSON-RPC error response with its own error code,
      passed through unchanged.
    """

    failure_category = "contract_violation"


class InvalidParams(ContractViolation):
    """A required tool argument is missing or has the wrong shape."""

    failure_category = "invalid_params"

    def __init__(self, message: str, *, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnknownTool(ContractViolation):
    """The requested tool is not part of the catalog."""

    failure_category = "unknown_tool"

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ConfigurationError(GatewayFailure):
    """
    Required registrar credentials are missing.

    - Fatality: Fatal to the call that needed the client. The process keeps
      serving; the next call attempts construction again.
    - MCP Representation: JSON-RPC INTERNAL_ERROR.
    """

    failure_category = "configuration_error"


class OperationFailure(GatewayFailure):
    """
    A registrar command failed.

    Covers transport errors, timeouts, non-2xx replies and error blocks
    reported by the registrar inside an otherwise successful reply.
    """

    failure_category = "operation_failure"

    def __init__(
        self,
        message: str,
        *,
        registrar_error: RegistrarError | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.registrar_error = registrar_error
        self.status_code = status_code


class InvalidDomain(GatewayFailure):
    """The domain name cannot be split into SLD and TLD."""

    failure_category = "invalid_domain"

    def __init__(self, domain: str) -> None:
        super().__init__(f"Invalid domain name: {domain}")
        self.domain = domain


class InternalError(GatewayFailure):
    """Catch-all wrapper for unexpected exceptions."""

    failure_category = "internal_error"
