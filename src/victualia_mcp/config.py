"""Configuration for the Victualia MCP server."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    service_name: str = Field(default="victualia-mcp")
    service_version: str = Field(default="1.1.0")

    victualia_openapi_url: str = Field(
        default="https://www.victualia.app/api/v1/openapi.json"
    )
    victualia_api_url: str = Field(default="https://www.victualia.app/api/v1")
    victualia_api_key: str = Field(default="")
    victualia_api_timeout_seconds: float = Field(default=30)

    victualia_mcp_transport: str = Field(default="stdio")
    victualia_mcp_host: str = Field(default="0.0.0.0")
    victualia_mcp_port: int = Field(default=8000)

    victualia_log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
