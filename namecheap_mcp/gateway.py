"""
Namecheap Tool Gateway

Translates MCP tool calls into Namecheap registrar operations.

The gateway:
1. Declares the fixed catalog of registrar tools
2. Validates tool arguments BEFORE any client construction or network I/O
3. Dispatches to the matching NamecheapClient operation
4. Serializes results as formatted JSON text
5. Normalizes every failure into a single JSON-RPC error envelope
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from .client import NamecheapClient
from .config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, NamecheapConfig
from .errors import GatewayFailure, InternalError, InvalidParams, UnknownTool
from .models import (
    DNSHost,
    ErrorCode,
    InitializeResult,
    JsonRpcErrorData,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    ListToolsResult,
    TextContent,
    Tool,
    ToolCallParams,
    ToolCallResult,
    make_error_response,
    make_success_response,
)
from .tools import NAMECHEAP_TOOLS, ToolDefinition

logger = logging.getLogger(__name__)


def client_from_env() -> NamecheapClient:
    """Build a registrar client from NAMECHEAP_* environment variables."""
    return NamecheapClient(NamecheapConfig.from_env())


def error_envelope(tool_name: str, exc: Exception) -> JsonRpcErrorData:
    """
    Normalize any failure raised while executing a tool.

    Protocol-level failures (bad arguments, unknown tool) keep their own code
    and message. Everything else becomes INTERNAL_ERROR, with non-gateway
    exceptions wrapped in InternalError first.
    """
    data: dict[str, Any] = {"tool": tool_name}

    if isinstance(exc, InvalidParams):
        data.update(category=exc.failure_category, errors=exc.errors)
        return JsonRpcErrorData(code=ErrorCode.INVALID_PARAMS.value, message=exc.message, data=data)

    if isinstance(exc, UnknownTool):
        data["category"] = exc.failure_category
        return JsonRpcErrorData(code=ErrorCode.METHOD_NOT_FOUND.value, message=exc.message, data=data)

    failure = exc if isinstance(exc, GatewayFailure) else InternalError(str(exc), cause=exc)
    data["category"] = failure.failure_category
    return JsonRpcErrorData(
        code=ErrorCode.INTERNAL_ERROR.value,
        message=f"Error executing {tool_name}: {failure.message}",
        data=data,
    )


class NamecheapGateway:
    """
    Exposes the Namecheap registrar as MCP tools.

    The registrar client is normally injected at construction. When it is not,
    the gateway builds it on first use through ``client_factory`` and caches
    it; a ConfigurationError leaves nothing cached, so the next call retries.
    """

    def __init__(
        self,
        client: NamecheapClient | None = None,
        *,
        client_factory: Callable[[], NamecheapClient] | None = None,
        tools: list[ToolDefinition] | None = None,
    ) -> None:
        self._client = client
        self._client_factory = client_factory or client_from_env
        self.tools: dict[str, ToolDefinition] = {}

        for tool in NAMECHEAP_TOOLS if tools is None else tools:
            self.tools[tool.name] = tool

    def get_client(self) -> NamecheapClient:
        """Return the registrar client, building it once if needed."""
        if self._client is None:
            self._client = self._client_factory()
            logger.info("Registrar client initialized for %s", self._client.base_url)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    def list_tools(self) -> list[Tool]:
        """Return the tool catalog in MCP format."""
        return [tool.to_mcp_tool() for tool in self.tools.values()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> ToolCallResult:
        """
        Execute a tool and return its JSON result as a single text block.

        Flow:
        1. Look up tool (UnknownTool if absent)
        2. VALIDATE arguments (InvalidParams, no network I/O)
        3. Obtain the registrar client (may raise ConfigurationError)
        4. Run the operation and unwrap its result
        5. Serialize to formatted JSON

        Raises:
            GatewayFailure: Any failure along the way, un-normalized.
        """
        tool = self.tools.get(name)
        if tool is None:
            raise UnknownTool(name)

        arguments = arguments or {}
        errors = tool.validate_arguments(arguments)
        if errors:
            raise InvalidParams(
                f"Invalid arguments for {name}: " + "; ".join(errors), errors=errors
            )

        client = self.get_client()
        payload = await self._dispatch(client, name, arguments)
        return ToolCallResult(content=[TextContent(text=json.dumps(payload, indent=2))])

    async def _dispatch(
        self, client: NamecheapClient, name: str, arguments: dict[str, Any]
    ) -> Any:
        match name:
            case "namecheap_check_domain":
                results = (await client.check_domain(arguments["domains"])).unwrap()
                return [r.model_dump(mode="json", exclude_none=True) for r in results]

            case "namecheap_list_domains":
                page = int(arguments.get("page", DEFAULT_PAGE))
                page_size = int(arguments.get("pageSize", DEFAULT_PAGE_SIZE))
                domains = (await client.list_domains(page, page_size)).unwrap()
                return {
                    "page": page,
                    "pageSize": page_size,
                    "count": len(domains),
                    "domains": domains,
                }

            case "namecheap_get_domain_info":
                info = (await client.get_domain_info(arguments["domain"])).unwrap()
                return info.model_dump(mode="json", exclude_none=True)

            case "namecheap_get_dns_hosts":
                hosts = (await client.get_dns_hosts(arguments["domain"])).unwrap()
                return [h.model_dump(mode="json", exclude_none=True) for h in hosts]

            case "namecheap_set_dns_hosts":
                hosts = [DNSHost.model_validate(h) for h in arguments["hosts"]]
                success = (await client.set_dns_hosts(arguments["domain"], hosts)).unwrap()
                return {
                    "success": success,
                    "message": (
                        "DNS hosts updated successfully" if success else "Failed to update DNS hosts"
                    ),
                }

            case "namecheap_get_nameservers":
                return (await client.get_nameservers(arguments["domain"])).unwrap()

            case "namecheap_set_nameservers":
                success = (
                    await client.set_nameservers(arguments["domain"], arguments["nameservers"])
                ).unwrap()
                return {
                    "success": success,
                    "message": (
                        "Nameservers updated successfully" if success else "Failed to update nameservers"
                    ),
                }

            case _:
                raise UnknownTool(name)

    async def handle_request(
        self, request: JsonRpcRequest
    ) -> JsonRpcResponse | JsonRpcErrorResponse | None:
        """
        Single entry point for all MCP operations.

        Supported methods:
            initialize  → server capabilities
            ping        → empty result
            tools/list  → available tools
            tools/call  → execute tool

        Notifications (requests without an id) are acknowledged silently and
        return None.
        """
        if request.is_notification:
            logger.debug("Received notification %s", request.method)
            return None

        match request.method:
            case "initialize":
                return make_success_response(request.id, InitializeResult().model_dump())

            case "ping":
                return make_success_response(request.id, {})

            case "tools/list":
                list_result = ListToolsResult(tools=self.list_tools())
                return make_success_response(request.id, list_result.model_dump())

            case "tools/call":
                return await self._handle_tools_call(request)

            case _:
                return make_error_response(
                    request.id,
                    ErrorCode.METHOD_NOT_FOUND,
                    f"Unknown method: {request.method}",
                )

    async def _handle_tools_call(
        self, request: JsonRpcRequest
    ) -> JsonRpcResponse | JsonRpcErrorResponse:
        if request.params is None:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                "Missing params for tools/call",
            )

        try:
            params = ToolCallParams(**request.params)
        except ValidationError as e:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                f"Invalid params: {e}",
            )

        outcome = await self.invoke_tool(params.name, params.arguments)
        if isinstance(outcome, JsonRpcErrorData):
            return JsonRpcErrorResponse(id=request.id, error=outcome)
        return make_success_response(request.id, outcome.model_dump())

    async def invoke_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> ToolCallResult | JsonRpcErrorData:
        """Run call_tool, logging any failure and returning its error envelope instead."""
        try:
            return await self.call_tool(name, arguments)
        except GatewayFailure as e:
            logger.warning("Tool %s failed: %s", name, e.message)
            return error_envelope(name, e)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return error_envelope(name, e)
