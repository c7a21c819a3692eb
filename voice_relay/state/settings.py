"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    api_key: str
    url: str
    model: str
    voice: str
    instructions: str
    transcription_model: str
    connect_timeout_s: float


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class ToolSettings:
    enabled: bool
    timeout_s: float
    tavily_api_key: str
    tavily_max_results: int


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class AppSettings:
    upstream: UpstreamSettings
    limits: LimitsSettings
    tools: ToolSettings
    server: ServerSettings


__all__ = [
    "AppSettings",
    "LimitsSettings",
    "ServerSettings",
    "ToolSettings",
    "UpstreamSettings",
]
