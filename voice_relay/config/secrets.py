"""Secrets configuration (env names only)."""

from __future__ import annotations

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_TAVILY_API_KEY = "TAVILY_API_KEY"

__all__ = ["ENV_OPENAI_API_KEY", "ENV_TAVILY_API_KEY"]
