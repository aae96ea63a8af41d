"""Logging setup and redaction of tool arguments before they are logged."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping


# header, cookie and body names that carry credentials for the home API
_SENSITIVE_KEYS = re.compile(
    r"(token|secret|api[_-]?key|password|passcode|authorization|cookie|session|credential)",
    re.IGNORECASE,
)
_REDACTED = "***REDACTED***"


def configure_logging(level: str) -> None:
    # stdout carries the stdio protocol stream, so logs go to stderr
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _redact_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return redact_payload(value)
    if isinstance(value, list):
        return [_redact_value(item) for item in value]
    return value


def redact_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy ``payload`` with credential-like keys masked, including inside
    nested request bodies and lists of objects."""
    return {
        key: _REDACTED if _SENSITIVE_KEYS.search(str(key)) else _redact_value(value)
        for key, value in payload.items()
    }
