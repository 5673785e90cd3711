"""
MCP Protocol and Registrar Models

Pydantic schemas for JSON-RPC 2.0 messages as used by the Model Context Protocol,
plus the value shapes returned by the Namecheap registrar tools.

Reference: https://modelcontextprotocol.io/specification
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, field_validator

from .config import MCP_PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from .errors import GatewayFailure

T = TypeVar("T")


# -----------------------------------------------------------------------------
# JSON-RPC 2.0 Base Types
# -----------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """
    JSON-RPC 2.0 request object.

    MCP uses JSON-RPC as its wire protocol. A request without an id member is
    a notification and never receives a response; an explicit ``"id": null``
    is still a request.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None = None
    method: str
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 success response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str
    result: Any


class JsonRpcErrorData(BaseModel):
    """Structured error information."""

    code: int
    message: str
    data: Any | None = None


class JsonRpcErrorResponse(BaseModel):
    """JSON-RPC 2.0 error response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None
    error: JsonRpcErrorData


# Standard JSON-RPC error codes
class ErrorCode(int, Enum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# -----------------------------------------------------------------------------
# MCP Tool Types
# -----------------------------------------------------------------------------


class ToolInputSchema(BaseModel):
    """
    JSON Schema describing a tool's input parameters.

    LLM agents use this schema to construct valid tool calls.
    """

    type: Literal["object"] = "object"
    properties: dict[str, dict[str, Any]] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)


class Tool(BaseModel):
    """MCP Tool definition."""

    name: str
    description: str
    inputSchema: ToolInputSchema  # noqa: N815 (MCP spec uses camelCase)


class ToolCallParams(BaseModel):
    """Parameters for tools/call method."""

    name: str
    arguments: dict[str, Any] | None = None


class TextContent(BaseModel):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of a tool invocation."""

    content: list[TextContent]
    isError: bool = False  # noqa: N815


class ListToolsResult(BaseModel):
    """Response to tools/list method."""

    tools: list[Tool]


class InitializeResult(BaseModel):
    """Response to initialize method."""

    protocolVersion: str = MCP_PROTOCOL_VERSION  # noqa: N815
    serverInfo: dict[str, str] = Field(  # noqa: N815
        default_factory=lambda: {"name": SERVER_NAME, "version": SERVER_VERSION}
    )
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})


# -----------------------------------------------------------------------------
# Registrar Types
# -----------------------------------------------------------------------------


class RegistrarError(BaseModel):
    """An <Error Number="..."> block reported by the registrar."""

    number: str | None = None
    message: str


class DomainCheckResult(BaseModel):
    """Availability of a single domain name."""

    domain: str
    available: bool
    errorMessage: str | None = None  # noqa: N815
    isPremiumName: bool | None = None  # noqa: N815
    premiumRegistrationPrice: str | None = None  # noqa: N815


class DnsDetails(BaseModel):
    providerType: str  # noqa: N815
    isUsingOurDNS: bool  # noqa: N815
    nameservers: list[str] = Field(default_factory=list)


class DomainInfo(BaseModel):
    """Ownership, DNS and lifetime details of a registered domain."""

    domainName: str  # noqa: N815
    ownerName: str  # noqa: N815
    isOwner: bool  # noqa: N815
    isPremium: bool  # noqa: N815
    dnsDetails: DnsDetails | None = None  # noqa: N815
    modificationRights: bool  # noqa: N815
    created: str
    expires: str


class DNSHost(BaseModel):
    """
    A single DNS host record.

    mxPref is meaningful for MX records only. Numeric mxPref and ttl values
    are accepted and normalized to strings, the form the registrar uses.
    """

    name: str
    type: str
    address: str
    mxPref: str | None = None  # noqa: N815
    ttl: str | None = None

    @field_validator("mxPref", "ttl", mode="before")
    @classmethod
    def _stringify_number(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# -----------------------------------------------------------------------------
# Operation Results
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Tagged outcome of a registrar operation.

    Exactly one of value/error is meaningful: a failed operation carries the
    GatewayFailure describing it instead of raising.
    """

    value: T | None = None
    error: GatewayFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> OperationResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GatewayFailure) -> OperationResult[T]:
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, or raise the carried failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------


def make_error_response(
    request_id: int | str | None,
    code: ErrorCode,
    message: str,
    data: Any | None = None,
) -> JsonRpcErrorResponse:
    """Construct a JSON-RPC error response."""
    return JsonRpcErrorResponse(
        id=request_id,
        error=JsonRpcErrorData(code=code.value, message=message, data=data),
    )


def make_success_response(request_id: int | str, result: Any) -> JsonRpcResponse:
    """Construct a JSON-RPC success response."""
    return JsonRpcResponse(id=request_id, result=result)
