"""
unkey_gateway.observability.logging

Structured logging for the gateway.

Responsibilities:
- Configure `structlog` to render one JSON object per line on stdout.
- Stamp every event with the service name and gateway version.
- Mask credentials (root key, caller API keys) before anything is rendered.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog

from unkey_gateway import __version__

# Event fields that may carry a root key or a caller's API key.
SECRET_FIELDS = frozenset({"authorization", "api_key", "root_key", "key", "x_api_key", "x-api-key"})
REDACTED = "[redacted]"


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask secret fields at the top level and inside nested mappings (e.g. headers)."""
    return _redact(event_dict)


def _redact(values: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in values.items():
        if name.lower() in SECRET_FIELDS:
            out[name] = REDACTED
        elif isinstance(value, Mapping):
            out[name] = _redact(value)
        else:
            out[name] = value
    return out


def _stamp_service(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", __version__)
        return event_dict

    return processor


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _stamp_service(service_name),
            redact_secrets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
