"""OpenAPI spec loader and operation parser."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .models import EndpointDescriptor, EndpointParameter, RequestBody


logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete")


class SpecFetchError(Exception):
    pass


def empty_spec() -> Dict[str, Any]:
    """Document used when the real spec cannot be fetched."""
    return {
        "openapi": "3.0.0",
        "info": {"title": "Victualia API", "version": "1.0.0"},
        "paths": {},
    }


def schema_registry(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Named component schemas that ``$ref`` pointers resolve against."""
    components = spec.get("components")
    if not isinstance(components, dict):
        return {}
    schemas = components.get("schemas")
    return schemas if isinstance(schemas, dict) else {}


class OpenAPILoader:
    def __init__(
        self,
        api_key: str = "",
        timeout_seconds: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def load_spec(self, url: str) -> Dict[str, Any]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise SpecFetchError(f"Failed to fetch OpenAPI spec: {exc}") from exc

        if not response.is_success:
            raise SpecFetchError(
                f"Failed to fetch OpenAPI spec: {response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise SpecFetchError(f"OpenAPI spec is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise SpecFetchError("OpenAPI spec must be a JSON object")
        return data

    def extract_operations(self, spec: Dict[str, Any]) -> List[EndpointDescriptor]:
        operations: List[EndpointDescriptor] = []
        paths = spec.get("paths")
        if not isinstance(paths, dict):
            return operations

        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue
            shared_parameters = self._parameters(path_item.get("parameters"))
            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if not isinstance(operation, dict):
                    continue
                operations.append(
                    self._build_descriptor(str(path), method, operation, shared_parameters)
                )

        return operations

    def _build_descriptor(
        self,
        path: str,
        method: str,
        operation: Dict[str, Any],
        shared_parameters: Tuple[EndpointParameter, ...],
    ) -> EndpointDescriptor:
        operation_id = operation.get("operationId")
        if not operation_id or not isinstance(operation_id, str):
            operation_id = self._fallback_operation_id(method, path)

        request_body = operation.get("requestBody")
        return EndpointDescriptor(
            name=self._sanitize_name(operation_id),
            description=self._describe(method, path, operation),
            method=method.upper(),
            path=path,
            parameters=shared_parameters + self._parameters(operation.get("parameters")),
            request_body=(
                RequestBody.from_dict(request_body) if isinstance(request_body, dict) else None
            ),
        )

    def _parameters(self, raw: Any) -> Tuple[EndpointParameter, ...]:
        if not isinstance(raw, list):
            return ()
        return tuple(EndpointParameter.from_dict(item) for item in raw if isinstance(item, dict))

    def _describe(self, method: str, path: str, operation: Dict[str, Any]) -> str:
        parts = [
            operation.get("summary"),
            operation.get("description"),
            f"[{method.upper()} {path}]",
        ]
        return "\n\n".join(part for part in parts if part and isinstance(part, str))

    def _fallback_operation_id(self, method: str, path: str) -> str:
        return f"{method}_{re.sub(r'[^a-zA-Z0-9]', '_', path)}"

    def _sanitize_name(self, name: str) -> str:
        return re.sub(r"[^a-zA-Z0-9_-]", "_", name).lower()
