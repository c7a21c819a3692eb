"""Tool registry configuration (env names and defaults)."""

from __future__ import annotations

ENV_TOOLS_ENABLED = "TOOLS_ENABLED"
ENV_TOOL_TIMEOUT_S = "TOOL_TIMEOUT_S"
ENV_TAVILY_MAX_RESULTS = "TAVILY_MAX_RESULTS"

DEFAULT_TOOLS_ENABLED = True
DEFAULT_TOOL_TIMEOUT_S = 15.0
DEFAULT_TAVILY_MAX_RESULTS = 5

TAVILY_SEARCH_URL = "https://api.tavily.com/search"

# Tavily results can be long; the model only needs the gist to speak it.
TAVILY_SNIPPET_CHARS = 400

__all__ = [
    "ENV_TOOLS_ENABLED",
    "ENV_TOOL_TIMEOUT_S",
    "ENV_TAVILY_MAX_RESULTS",
    "DEFAULT_TOOLS_ENABLED",
    "DEFAULT_TOOL_TIMEOUT_S",
    "DEFAULT_TAVILY_MAX_RESULTS",
    "TAVILY_SEARCH_URL",
    "TAVILY_SNIPPET_CHARS",
]
