"""
unkey_gateway.unkey.telemetry

Host-environment probe for Unkey telemetry headers.

Responsibilities:
- Detect the hosting platform (Vercel, AWS) and runtime from the environment.
- Produce an immutable `TelemetryInfo`, computed once per client.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from platform import python_version as _python_version


@dataclass(frozen=True, slots=True)
class TelemetryInfo:
    platform: str | None
    runtime: str
    sdk_versions: tuple[str, ...] = ()

    def headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.sdk_versions:
            headers["Unkey-Telemetry-SDK"] = ",".join(self.sdk_versions)
        if self.platform:
            headers["Unkey-Telemetry-Platform"] = self.platform
        headers["Unkey-Telemetry-Runtime"] = self.runtime
        return headers


@dataclass(frozen=True, slots=True)
class HostEnvironment:
    """
    Snapshot of the process environment relevant to telemetry.

    Tests build one from a plain dict; production code uses `current()`.
    """

    environ: Mapping[str, str] = field(default_factory=dict)
    python_version: str = field(default_factory=_python_version)

    @classmethod
    def current(cls) -> HostEnvironment:
        return cls(environ=dict(os.environ))

    def platform(self) -> str | None:
        if self.environ.get("VERCEL"):
            return "vercel"
        if self.environ.get("AWS_REGION"):
            return "aws"
        return None

    def runtime(self) -> str:
        if self.environ.get("EdgeRuntime"):
            return "edge-light"
        return f"python@{self.python_version}"

    def telemetry(self, *, sdk_versions: Sequence[str] = ()) -> TelemetryInfo:
        return TelemetryInfo(
            platform=self.platform(),
            runtime=self.runtime(),
            sdk_versions=tuple(sdk_versions),
        )


# --- Module Notes -----------------------------------------------------------
# Reading the environment only here keeps `UnkeyClient` free of global lookups
# after construction.
