"""
End-to-end tests for the MCP server surface, using an in-memory client.
"""
import json
from typing import List

import httpx
import pytest  # type: ignore[import-not-found]
from fastmcp import Client

from victualia_mcp.prompts import PROMPTS
from victualia_mcp.server import EndpointTool, build_server
from victualia_mcp.service import ToolService
from victualia_mcp.tool_registry import RegisteredTool


def _api_transport(spec, requests: List[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/openapi.json":
            return httpx.Response(200, json=spec)
        if request.url.path == "/v1/homes":
            return httpx.Response(200, json=[{"id": "h1", "name": "Main"}])
        if request.url.path == "/v1/homes/42/items":
            return httpx.Response(200, text="plain listing", headers={"content-type": "text/plain"})
        return httpx.Response(404, json={"error": "not found"})

    return httpx.MockTransport(handler)


class TestServer:
    async def test_registers_endpoint_and_utility_tools(self, settings, homes_spec):
        mcp = await build_server(settings, transport=_api_transport(homes_spec, []))
        async with Client(mcp) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        assert set(tools) == {"listhomes", "listitems", "createitem", "list_endpoints", "api_info"}
        schema = tools["listitems"].inputSchema
        assert schema["required"] == ["homeId"]
        assert schema["properties"]["location"]["enum"] == ["fridge", "pantry", "freezer"]
        assert tools["listitems"].description.endswith("[GET /homes/{homeId}/items]")

    async def test_calls_endpoint(self, settings, homes_spec):
        requests: List[httpx.Request] = []
        mcp = await build_server(settings, transport=_api_transport(homes_spec, requests))
        async with Client(mcp) as client:
            result = await client.call_tool_mcp("listhomes", {})

        assert not result.isError
        assert json.loads(result.content[0].text) == {
            "status": 200,
            "statusText": "OK",
            "data": [{"id": "h1", "name": "Main"}],
        }
        api_request = requests[-1]
        assert api_request.headers["authorization"] == "Bearer secret-key"

    async def test_text_response_and_query(self, settings, homes_spec):
        requests: List[httpx.Request] = []
        mcp = await build_server(settings, transport=_api_transport(homes_spec, requests))
        async with Client(mcp) as client:
            result = await client.call_tool_mcp(
                "listitems", {"homeId": "42", "category": "produce"}
            )

        assert json.loads(result.content[0].text)["data"] == "plain listing"
        assert requests[-1].url.raw_path == b"/v1/homes/42/items?category=produce"

    async def test_invalid_arguments_are_reported(self, settings, homes_spec):
        requests: List[httpx.Request] = []
        mcp = await build_server(settings, transport=_api_transport(homes_spec, requests))
        async with Client(mcp) as client:
            result = await client.call_tool_mcp("listitems", {"location": "garage"})

        assert result.isError
        assert "garage" in result.content[0].text
        assert [r.url.path for r in requests] == ["/openapi.json"]

    async def test_list_endpoints_and_api_info(self, settings, homes_spec):
        mcp = await build_server(settings, transport=_api_transport(homes_spec, []))
        async with Client(mcp) as client:
            endpoints = json.loads((await client.call_tool_mcp("list_endpoints", {})).content[0].text)
            info = json.loads((await client.call_tool_mcp("api_info", {})).content[0].text)

        assert [e["name"] for e in endpoints] == ["listhomes", "listitems", "createitem"]
        assert info["totalEndpoints"] == 3
        assert info["baseUrl"] == "https://api.test/v1"

    async def test_spec_fetch_failure_starts_without_endpoint_tools(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="down"))
        mcp = await build_server(settings, transport=transport)
        async with Client(mcp) as client:
            names = {tool.name for tool in await client.list_tools()}
            endpoints = json.loads((await client.call_tool_mcp("list_endpoints", {})).content[0].text)
            info = json.loads((await client.call_tool_mcp("api_info", {})).content[0].text)

        assert names == {"list_endpoints", "api_info"}
        assert endpoints == []
        assert info["title"] == "Victualia API"
        assert info["totalEndpoints"] == 0

    async def test_prompts(self, settings, homes_spec):
        mcp = await build_server(settings, transport=_api_transport(homes_spec, []))
        async with Client(mcp) as client:
            names = {prompt.name for prompt in await client.list_prompts()}
            prompt = await client.get_prompt("inventory-check")

        assert names == set(PROMPTS)
        assert prompt.messages[0].content.text.startswith("Please review my home inventory")

    async def test_endpoint_tools_hold_their_service_and_registration(self, settings, homes_spec):
        mcp = await build_server(settings, transport=_api_transport(homes_spec, []))
        tool = await mcp.get_tool("listitems")

        assert isinstance(tool, EndpointTool)
        assert isinstance(tool._service, ToolService)
        assert isinstance(tool._registered, RegisteredTool)
        assert tool._registered.descriptor.path == "/homes/{homeId}/items"
