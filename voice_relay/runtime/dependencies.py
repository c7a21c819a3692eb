"""Runtime dependency construction (tool registry + admission control)."""

from __future__ import annotations

import logging

import httpx

from voice_relay.state import RuntimeDeps
from voice_relay.state.settings import AppSettings
from voice_relay.tools import build_tool_registry
from voice_relay.handlers.connections import ConnectionManager

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    http_client = httpx.AsyncClient(timeout=settings.tools.timeout_s)
    tool_registry = build_tool_registry(settings.tools, http_client=http_client)
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    if not settings.upstream.api_key:
        logger.warning("OPENAI_API_KEY is not set; clients will receive an error on connect")
    logger.info(
        "runtime: model=%s voice=%s tools=%s",
        settings.upstream.model,
        settings.upstream.voice,
        ",".join(tool_registry.names()) or "none",
    )

    return RuntimeDeps(
        connections=connections,
        tool_registry=tool_registry,
        settings=settings,
        http_client=http_client,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
