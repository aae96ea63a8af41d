"""HTTP dispatch of endpoint tool calls to the Victualia API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

import httpx

from .logging import redact_payload
from .models import ApiResponse, EndpointDescriptor

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "PATCH")

# characters encodeURIComponent leaves alone
_PATH_SAFE = "-_.!~*'()"


class DispatchError(Exception):
    pass


def stringify(value: Any) -> str:
    """Render an argument the way it appears in a URL or header."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


class RequestDispatcher:
    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout_seconds: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def dispatch(
        self, descriptor: EndpointDescriptor, arguments: Mapping[str, Any]
    ) -> ApiResponse:
        url = self.build_url(descriptor, arguments)
        headers = self.build_headers(descriptor, arguments)
        content = self.build_body(descriptor, arguments, headers)

        logger.info(
            "Dispatching %s %s tool=%s args=%s",
            descriptor.method,
            descriptor.path,
            descriptor.name,
            redact_payload(arguments),
        )
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.request(
                    descriptor.method, url, headers=headers, content=content
                )
                return self.parse_response(response)
        except httpx.HTTPError as exc:
            logger.error("Request failed tool=%s: %s", descriptor.name, exc)
            raise DispatchError(str(exc) or exc.__class__.__name__) from exc

    def build_url(self, descriptor: EndpointDescriptor, arguments: Mapping[str, Any]) -> str:
        path = descriptor.path
        for param in descriptor.parameters_in("path"):
            value = arguments.get(param.name)
            if value is None:
                continue
            path = path.replace(f"{{{param.name}}}", quote(stringify(value), safe=_PATH_SAFE))

        query: List[Tuple[str, str]] = []
        for param in descriptor.parameters_in("query"):
            value = arguments.get(param.name)
            if value is None:
                continue
            query.append((param.name, stringify(value)))

        url = f"{self.base_url}{path}"
        if query:
            url += f"?{urlencode(query)}"
        return url

    def build_headers(
        self, descriptor: EndpointDescriptor, arguments: Mapping[str, Any]
    ) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        for param in descriptor.parameters_in("header"):
            value = arguments.get(param.name)
            if value is None:
                continue
            headers[param.name] = stringify(value)
        return headers

    def build_body(
        self,
        descriptor: EndpointDescriptor,
        arguments: Mapping[str, Any],
        headers: Dict[str, str],
    ) -> Optional[str]:
        """Serialize ``arguments["body"]``; sets the JSON content type when sent."""
        if descriptor.method not in BODY_METHODS:
            return None
        body = arguments.get("body")
        if body is None:
            return None
        headers["Content-Type"] = "application/json"
        return json.dumps(body)

    def parse_response(self, response: httpx.Response) -> ApiResponse:
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                data = response.json()
            except ValueError as exc:
                raise DispatchError(f"Invalid JSON response: {exc}") from exc
        else:
            data = response.text

        return ApiResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            data=data,
        )
