"""MCP server setup for the Victualia API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from pydantic import PrivateAttr

from .api_client import RequestDispatcher
from .config import Settings
from .openapi import OpenAPILoader, SpecFetchError, empty_spec
from .prompts import register_prompts
from .service import ToolService, dump_json
from .tool_registry import RegisteredTool, ToolRegistry

logger = logging.getLogger(__name__)


class EndpointTool(Tool):
    """MCP tool backed by one API endpoint.

    ``parameters`` is the JSON Schema of the endpoint's input model; the model
    itself validates the arguments before anything is sent.
    """

    _service: Optional[ToolService] = PrivateAttr(default=None)
    _registered: Optional[RegisteredTool] = PrivateAttr(default=None)

    @classmethod
    def from_registered(cls, registered: RegisteredTool, service: ToolService) -> "EndpointTool":
        tool = cls(
            name=registered.name,
            description=registered.descriptor.description,
            parameters=registered.input_schema(),
        )
        tool._service = service
        tool._registered = registered
        return tool

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        result = await self._service.execute_tool(self._registered, arguments)
        if result.get("is_error"):
            raise ToolError(result["text"])
        return ToolResult(content=result["text"])


async def build_server(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastMCP:
    loader = OpenAPILoader(
        api_key=settings.victualia_api_key,
        timeout_seconds=settings.victualia_api_timeout_seconds,
        transport=transport,
    )
    spec = await _load_spec(loader, settings)
    registry = ToolRegistry.from_spec(spec, loader)
    dispatcher = RequestDispatcher(
        base_url=settings.victualia_api_url,
        api_key=settings.victualia_api_key,
        timeout_seconds=settings.victualia_api_timeout_seconds,
        transport=transport,
    )
    service = ToolService(registry, dispatcher, spec, settings.victualia_api_url)

    mcp = FastMCP(settings.service_name, instructions=_instructions())
    for registered in registry:
        mcp.add_tool(EndpointTool.from_registered(registered, service))
        logger.info("Registered tool: %s", registered.name)
    _register_utility_tools(mcp, service)
    register_prompts(mcp)

    logger.info("Registered %s endpoint tools", len(registry))
    return mcp


async def _load_spec(loader: OpenAPILoader, settings: Settings) -> Dict[str, Any]:
    url = settings.victualia_openapi_url
    logger.info("Fetching OpenAPI spec from %s", url)
    try:
        spec = await loader.load_spec(url)
    except SpecFetchError as exc:
        logger.warning("%s", exc)
        logger.warning(
            "Starting with no tools. Set VICTUALIA_API_KEY if authentication is required."
        )
        return empty_spec()

    logger.info("Loaded OpenAPI spec from %s", url)
    return spec


def _register_utility_tools(mcp: FastMCP, service: ToolService) -> None:
    @mcp.tool(name="list_endpoints", description="List all available Victualia API endpoints")
    def list_endpoints() -> str:
        return dump_json(service.list_endpoints())

    @mcp.tool(name="api_info", description="Get information about the Victualia API")
    def api_info() -> str:
        return dump_json(service.api_info())


def _instructions() -> str:
    return (
        "Victualia home management API exposed as MCP tools. "
        "Each API operation is a tool; use list_endpoints to see them all."
    )


def get_http_app(mcp: FastMCP, settings: Settings):  # type: ignore[no-untyped-def]
    transport = settings.victualia_mcp_transport.lower()
    if transport == "http":
        app = mcp.http_app(transport="http", stateless_http=True, json_response=True)
    elif transport in {"streamable-http", "streamablehttp"}:
        app = mcp.http_app(
            transport="streamable-http", stateless_http=True, json_response=True
        )
    elif transport == "sse":
        app = mcp.http_app(transport="sse")
    else:
        return None
    _attach_healthcheck(app)
    return app


def _attach_healthcheck(app) -> None:  # type: ignore[no-untyped-def]
    async def healthcheck(_request):  # type: ignore[no-untyped-def]
        from starlette.responses import JSONResponse

        return JSONResponse({"status": "ok"})

    app.add_route("/health", healthcheck, methods=["GET"])
