"""Internal models for endpoint descriptors and API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class EndpointParameter:
    name: str
    location: str
    required: bool = False
    description: Optional[str] = None
    schema: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "EndpointParameter":
        schema = raw.get("schema")
        description = raw.get("description")
        return cls(
            name=str(raw.get("name") or ""),
            location=str(raw.get("in") or ""),
            required=bool(raw.get("required", False)),
            description=description if isinstance(description, str) else None,
            schema=schema if isinstance(schema, dict) else {},
        )


@dataclass(frozen=True)
class RequestBody:
    required: bool = False
    content: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RequestBody":
        content = raw.get("content")
        return cls(
            required=bool(raw.get("required", False)),
            content=content if isinstance(content, dict) else {},
        )

    def json_schema(self) -> Optional[Any]:
        """Schema of the ``application/json`` media type, if declared."""
        media = self.content.get("application/json")
        if not isinstance(media, dict):
            return None
        return media.get("schema")


@dataclass(frozen=True)
class EndpointDescriptor:
    name: str
    description: str
    method: str
    path: str
    parameters: Tuple[EndpointParameter, ...] = ()
    request_body: Optional[RequestBody] = None

    def parameters_in(self, location: str) -> Tuple[EndpointParameter, ...]:
        return tuple(param for param in self.parameters if param.location == location)


@dataclass(frozen=True)
class ApiResponse:
    status: int
    status_text: str
    data: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "statusText": self.status_text, "data": self.data}
