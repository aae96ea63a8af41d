"""
Shared fixtures for the Victualia MCP tests.
"""
import copy
from typing import Any, Dict

import pytest  # type: ignore[import-not-found]

from victualia_mcp.config import Settings


_HOMES_SPEC: Dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Victualia API", "version": "2.3.0", "description": "Home management"},
    "paths": {
        "/homes": {
            "get": {
                "operationId": "listHomes",
                "summary": "List homes",
                "description": "Returns every home the caller can access.",
            },
        },
        "/homes/{homeId}/items": {
            "parameters": [
                {"name": "homeId", "in": "path", "required": True, "schema": {"type": "string"}},
            ],
            "get": {
                "operationId": "listItems",
                "summary": "List inventory items",
                "parameters": [
                    {"name": "category", "in": "query", "schema": {"type": "string"}},
                    {
                        "name": "location",
                        "in": "query",
                        "schema": {"type": "string", "enum": ["fridge", "pantry", "freezer"]},
                    },
                    {"name": "expiresInDays", "in": "query", "schema": {"type": "integer"}},
                ],
            },
            "post": {
                "operationId": "createItem",
                "summary": "Create an item",
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/ItemInput"}},
                    },
                },
            },
        },
    },
    "components": {
        "schemas": {
            "ItemInput": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "description": "Item name"},
                    "quantity": {"type": "number"},
                    "location": {"type": "string", "enum": ["fridge", "pantry", "freezer"]},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "notes": {"type": "string", "nullable": True},
                },
            },
        },
    },
}


@pytest.fixture
def homes_spec() -> Dict[str, Any]:
    return copy.deepcopy(_HOMES_SPEC)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        victualia_openapi_url="https://api.test/openapi.json",
        victualia_api_url="https://api.test/v1",
        victualia_api_key="secret-key",
    )
