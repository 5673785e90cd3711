"""
MCP Server

Runs the Namecheap gateway over one of two transports:

- stdio: the MCP SDK's stdio transport, used when an MCP client launches
  the server as a subprocess (default)
- http: FastAPI application accepting JSON-RPC 2.0 over HTTP POST

stdout is reserved for protocol messages; all logging goes to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from io import TextIOWrapper
from typing import Any, BinaryIO

import anyio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import ValidationError

from .config import LOG_LEVEL, SERVER_NAME, SERVER_VERSION
from .errors import ConfigurationError
from .gateway import NamecheapGateway, client_from_env
from .models import (
    ErrorCode,
    JsonRpcErrorData,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    make_error_response,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Shared JSON-RPC Entry
# -----------------------------------------------------------------------------


async def process_message(
    gateway: NamecheapGateway, payload: str | bytes | Any
) -> JsonRpcResponse | JsonRpcErrorResponse | None:
    """
    Parse and handle one JSON-RPC message.

    Raw text is decoded first; already-decoded objects are used as-is.
    Bytes that are not valid UTF-8 are a parse error like malformed JSON.
    Returns None for notifications.
    """
    if isinstance(payload, (str, bytes)):
        try:
            body = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return make_error_response(None, ErrorCode.PARSE_ERROR, "Invalid JSON")
    else:
        body = payload

    if not isinstance(body, dict):
        return make_error_response(
            None, ErrorCode.INVALID_REQUEST, "Invalid request: expected a JSON object"
        )

    try:
        rpc_request = JsonRpcRequest(**body)
    except ValidationError as e:
        request_id = body.get("id")
        return make_error_response(
            request_id if isinstance(request_id, (int, str)) else None,
            ErrorCode.INVALID_REQUEST,
            f"Invalid request: {e}",
        )

    return await gateway.handle_request(rpc_request)


# -----------------------------------------------------------------------------
# stdio Transport
# -----------------------------------------------------------------------------


def build_mcp_server(gateway: NamecheapGateway) -> Server:
    """
    Wrap the gateway in an MCP SDK server.

    tools/call is registered straight into ``request_handlers``: the SDK's
    ``call_tool()`` decorator turns every exception into an ``isError``
    result, while gateway failures must reach the client as JSON-RPC errors
    carrying the gateway's error envelope.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool.model_validate(tool.model_dump()) for tool in gateway.list_tools()]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        outcome = await gateway.invoke_tool(request.params.name, request.params.arguments)
        if isinstance(outcome, JsonRpcErrorData):
            raise McpError(types.ErrorData(**outcome.model_dump()))
        return types.ServerResult(types.CallToolResult.model_validate(outcome.model_dump()))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve_stdio(
    gateway: NamecheapGateway,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> None:
    """
    Serve MCP over stdio until stdin is closed.

    Undecodable input bytes are replaced instead of raised, so a corrupt line
    is rejected as unparseable and the session carries on.
    """
    server = build_mcp_server(gateway)
    text_in = TextIOWrapper(stdin or sys.stdin.buffer, encoding="utf-8", errors="replace")
    text_out = TextIOWrapper(stdout or sys.stdout.buffer, encoding="utf-8")

    logger.info("%s %s running on stdio", SERVER_NAME, SERVER_VERSION)
    try:
        async with stdio_server(anyio.wrap_file(text_in), anyio.wrap_file(text_out)) as (
            read_stream,
            write_stream,
        ):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        # Leave the underlying byte streams open for their owner.
        text_in.detach()
        text_out.detach()
        await gateway.close()


# -----------------------------------------------------------------------------
# HTTP Transport
# -----------------------------------------------------------------------------


def create_app(gateway: NamecheapGateway) -> FastAPI:
    """Build the FastAPI application around an existing gateway."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Release the registrar HTTP client on shutdown."""
        yield
        await gateway.close()

    app = FastAPI(
        title="Namecheap MCP Server",
        description="Namecheap registrar operations exposed as MCP tools.",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    @app.post("/mcp")
    async def mcp_endpoint(request: Request) -> Response:
        """Main MCP endpoint accepting JSON-RPC 2.0 requests."""
        response = await process_message(gateway, await request.body())
        if response is None:
            return Response(status_code=202)
        return JSONResponse(content=response.model_dump(), status_code=200)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/tools")
    async def list_tools() -> dict[str, Any]:
        """
        Convenience endpoint to list available tools.

        Not part of MCP spec - just useful for debugging and exploration.
        """
        return {"tools": [t.model_dump() for t in gateway.list_tools()]}

    return app


# -----------------------------------------------------------------------------
# Entry Point
# -----------------------------------------------------------------------------


def build_gateway() -> NamecheapGateway:
    """
    Construct the gateway with a registrar client built from the environment.

    With incomplete credentials the server still starts; every tool call then
    retries construction and reports the ConfigurationError to the caller.
    """
    try:
        client = client_from_env()
    except ConfigurationError as e:
        logger.warning("%s; tool calls will fail until it is set", e.message)
        return NamecheapGateway()
    return NamecheapGateway(client)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="namecheap-mcp", description="Namecheap registrar MCP server")
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("mcp").setLevel(logging.WARNING)

    gateway = build_gateway()
    try:
        if args.transport == "http":
            import uvicorn

            uvicorn.run(create_app(gateway), host=args.host, port=args.port)
        else:
            asyncio.run(serve_stdio(gateway))
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Server error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
