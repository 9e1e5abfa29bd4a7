"""
unkey_gateway.unkey.models

Value types exchanged with the Unkey client.

Responsibilities:
- Describe one outbound call (`OutboundRequest`).
- Represent its outcome as `Ok` or `Err` instead of raising.
- Hold the retry policy (attempt count + pluggable backoff).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Union

FETCH_ERROR = "FETCH_ERROR"


def default_backoff(attempt: int) -> int:
    """Delay in milliseconds before retrying after failed attempt `attempt` (0-based)."""
    return round(math.exp(attempt) * 10)


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    # `attempts` counts retries: a call is tried `attempts + 1` times in total.
    attempts: int = 5
    backoff: Callable[[int], int] = default_backoff

    def __post_init__(self) -> None:
        if self.attempts < 0:
            raise ValueError("retry attempts must be >= 0")


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    path: tuple[str, ...]
    method: Literal["GET", "POST"]
    query: Mapping[str, Any] | None = None
    body: Any = None

    def __post_init__(self) -> None:
        # Accept any sequence for `path` but store it as a tuple.
        object.__setattr__(self, "path", tuple(self.path))
        if not self.path:
            raise ValueError("outbound request path must not be empty")
        if self.method not in ("GET", "POST"):
            raise ValueError(f"unsupported method: {self.method!r}")


class UnkeyError(Exception):
    """
    Raised when an `Err` result is unwrapped.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class Ok:
    result: Any

    def unwrap(self) -> Any:
        return self.result

    def to_dict(self) -> dict[str, Any]:
        return {"result": self.result}


@dataclass(frozen=True, slots=True)
class Err:
    code: str
    message: str

    def unwrap(self) -> Any:
        raise UnkeyError(self.code, self.message)


Result = Union[Ok, Err]


# --- Module Notes -----------------------------------------------------------
# `Ok.to_dict` mirrors the envelope the Unkey SDKs return; the gateway routes
# send it back as-is on success.
