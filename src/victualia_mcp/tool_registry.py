"""Tool registry for the Victualia MCP server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel

from .models import EndpointDescriptor
from .openapi import OpenAPILoader, schema_registry
from .schema import build_input_model


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: EndpointDescriptor
    input_model: type[BaseModel]

    @property
    def name(self) -> str:
        return self.descriptor.name

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema()


class ToolRegistry:
    """Endpoint tools keyed by name, built once per loaded spec.

    Operations that normalize to the same name replace the earlier entry.
    """

    def __init__(self, tools: Iterable[RegisteredTool] = ()) -> None:
        self._tools: Dict[str, RegisteredTool] = {}
        for tool in tools:
            previous = self._tools.get(tool.name)
            if previous is not None:
                logger.warning(
                    "Duplicate tool name %s: %s %s replaces %s %s",
                    tool.name,
                    tool.descriptor.method,
                    tool.descriptor.path,
                    previous.descriptor.method,
                    previous.descriptor.path,
                )
            self._tools[tool.name] = tool

    @classmethod
    def from_spec(
        cls, spec: Dict[str, Any], loader: Optional[OpenAPILoader] = None
    ) -> "ToolRegistry":
        loader = loader or OpenAPILoader()
        registry = schema_registry(spec)
        descriptors = loader.extract_operations(spec)
        return cls(
            RegisteredTool(descriptor=descriptor, input_model=build_input_model(descriptor, registry))
            for descriptor in descriptors
        )

    def get(self, name: str) -> Optional[RegisteredTool]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def descriptors(self) -> List[EndpointDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
