"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import httpx

    from voice_relay.state.settings import AppSettings
    from voice_relay.tools.registry import ToolRegistry
    from voice_relay.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    tool_registry: ToolRegistry
    settings: AppSettings
    http_client: httpx.AsyncClient

    async def shutdown(self) -> None:
        try:
            await self.http_client.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
