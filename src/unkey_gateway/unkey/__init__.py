"""
unkey_gateway.unkey

Client boundary for the remote Unkey key-management API.

Responsibilities:
- Outbound request/result types and the retry policy.
- Host-environment probe used for telemetry headers.
- The retrying `UnkeyClient`.
"""

from unkey_gateway.unkey.client import UnkeyClient
from unkey_gateway.unkey.models import (
    FETCH_ERROR,
    Err,
    Ok,
    OutboundRequest,
    Result,
    RetryPolicy,
    UnkeyError,
    default_backoff,
)
from unkey_gateway.unkey.telemetry import HostEnvironment, TelemetryInfo

__all__ = [
    "FETCH_ERROR",
    "Err",
    "HostEnvironment",
    "Ok",
    "OutboundRequest",
    "Result",
    "RetryPolicy",
    "TelemetryInfo",
    "UnkeyClient",
    "UnkeyError",
    "default_backoff",
]


# --- Module Notes -----------------------------------------------------------
# The API layer should depend on this package, never on raw httpx calls.
