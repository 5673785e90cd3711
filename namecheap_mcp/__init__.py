"""Namecheap MCP server package."""

from .client import NamecheapClient, split_domain
from .config import (
    HTTP_TIMEOUT_SECONDS,
    MCP_PROTOCOL_VERSION,
    NAMECHEAP_API_URL,
    NAMECHEAP_SANDBOX_API_URL,
    SERVER_NAME,
    SERVER_VERSION,
    SUPPORTED_RECORD_TYPES,
    NamecheapConfig,
)
from .errors import (
    ConfigurationError,
    ContractViolation,
    GatewayFailure,
    InternalError,
    InvalidDomain,
    InvalidParams,
    OperationFailure,
    UnknownTool,
)
from .gateway import NamecheapGateway, error_envelope
from .models import (
    DnsDetails,
    DNSHost,
    DomainCheckResult,
    DomainInfo,
    ErrorCode,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    OperationResult,
    RegistrarError,
    Tool,
    ToolCallResult,
)
from .tools import NAMECHEAP_TOOLS, ToolDefinition

__all__ = [
    # Client
    "NamecheapClient",
    "split_domain",
    # Gateway
    "NamecheapGateway",
    "error_envelope",
    "NAMECHEAP_TOOLS",
    "ToolDefinition",
    # Config
    "NamecheapConfig",
    "NAMECHEAP_API_URL",
    "NAMECHEAP_SANDBOX_API_URL",
    "HTTP_TIMEOUT_SECONDS",
    "SUPPORTED_RECORD_TYPES",
    "SERVER_NAME",
    "SERVER_VERSION",
    "MCP_PROTOCOL_VERSION",
    # Errors
    "GatewayFailure",
    "ContractViolation",
    "InvalidParams",
    "UnknownTool",
    "ConfigurationError",
    "OperationFailure",
    "InvalidDomain",
    "InternalError",
    # Models
    "DomainCheckResult",
    "DomainInfo",
    "DnsDetails",
    "DNSHost",
    "RegistrarError",
    "OperationResult",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcErrorResponse",
    "ErrorCode",
    "Tool",
    "ToolCallResult",
]
