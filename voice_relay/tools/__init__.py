"""Tool registry construction."""

from __future__ import annotations

import logging

import httpx

from voice_relay.state.settings import ToolSettings

from .arithmetic import ADD_TOOL, add
from .registry import ToolHandler, ToolRegistry
from .search import WEB_SEARCH_TOOL, TavilySearchTool

logger = logging.getLogger(__name__)


def build_tool_registry(settings: ToolSettings, *, http_client: httpx.AsyncClient) -> ToolRegistry:
    registry = ToolRegistry(timeout_s=settings.timeout_s)
    if not settings.enabled:
        return registry

    registry.register(ADD_TOOL, add)

    if settings.tavily_api_key:
        search = TavilySearchTool(
            http_client=http_client,
            api_key=settings.tavily_api_key,
            max_results=settings.tavily_max_results,
        )
        registry.register(WEB_SEARCH_TOOL, search)
    else:
        logger.warning("TAVILY_API_KEY not set; web_search tool disabled")

    return registry


__all__ = ["ToolHandler", "ToolRegistry", "build_tool_registry"]
