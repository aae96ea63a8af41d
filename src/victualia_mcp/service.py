"""Core service logic behind the MCP tools."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from .api_client import DispatchError, RequestDispatcher
from .tool_registry import RegisteredTool, ToolRegistry

logger = logging.getLogger(__name__)


class ToolService:
    def __init__(
        self,
        registry: ToolRegistry,
        dispatcher: RequestDispatcher,
        spec: Dict[str, Any],
        base_url: str,
    ) -> None:
        self.registry = registry
        self.dispatcher = dispatcher
        self.spec = spec
        self.base_url = base_url

    async def execute_tool(
        self, tool: RegisteredTool, arguments: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """
        Validate ``arguments`` against the tool's input model and call the API.

        Returns:
            Either ``{"text": <pretty JSON ApiResponse>}`` or
            ``{"text": "Error: ...", "is_error": True}``.
        """
        try:
            payload = tool.input_model.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            logger.warning("Rejected arguments for tool=%s: %s", tool.name, exc)
            return self._format_error(f"Invalid arguments for {tool.name}: {exc}")

        validated = payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
        try:
            response = await self.dispatcher.dispatch(tool.descriptor, validated)
        except DispatchError as exc:
            logger.error("Tool execution failed: tool=%s error=%s", tool.name, exc)
            return self._format_error(str(exc))

        return self._format_result(response.to_dict())

    def list_endpoints(self) -> List[Dict[str, str]]:
        return [
            {
                "name": descriptor.name,
                "method": descriptor.method,
                "path": descriptor.path,
                "description": descriptor.description.split("\n")[0],
            }
            for descriptor in self.registry.descriptors()
        ]

    def api_info(self) -> Dict[str, Any]:
        info = self.spec.get("info")
        if not isinstance(info, dict):
            info = {}
        result: Dict[str, Any] = {
            "title": info.get("title"),
            "version": info.get("version"),
        }
        if info.get("description") is not None:
            result["description"] = info["description"]
        result["baseUrl"] = self.base_url
        result["totalEndpoints"] = len(self.registry)
        return result

    def _format_result(self, result: Any) -> Dict[str, Any]:
        return {"text": dump_json(result)}

    def _format_error(self, message: str) -> Dict[str, Any]:
        return {"text": f"Error: {message}", "is_error": True}


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)
