"""Web search tool backed by the Tavily search API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from voice_relay.errors import ToolExecutionError
from voice_relay.state.tools import ToolParameter, ToolDefinition
from voice_relay.config.tools import TAVILY_SEARCH_URL, TAVILY_SNIPPET_CHARS

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL = ToolDefinition(
    name="web_search",
    description=(
        "This is a search tool for accessing the internet.\n\n"
        "Let the user know you're asking your friend Tavily for help before you call the tool."
    ),
    parameters=(ToolParameter(name="query", type="string", description="The search query"),),
)


def _format_results(body: dict[str, Any]) -> str:
    lines: list[str] = []
    answer = body.get("answer")
    if isinstance(answer, str) and answer.strip():
        lines.append(f"Answer: {answer.strip()}")

    for item in body.get("results") or []:
        if not isinstance(item, dict):
            continue
        title = str(item.get("title") or "").strip()
        url = str(item.get("url") or "").strip()
        content = str(item.get("content") or "").strip()[:TAVILY_SNIPPET_CHARS]
        lines.append(f"- {title} ({url}): {content}")

    return "\n".join(lines) if lines else "No results found."


class TavilySearchTool:
    def __init__(self, *, http_client: httpx.AsyncClient, api_key: str, max_results: int) -> None:
        self._http = http_client
        self._api_key = api_key
        self._max_results = int(max_results)

    async def __call__(self, args: dict[str, Any]) -> str:
        query = args.get("query")
        if not isinstance(query, str) or not query.strip():
            raise ToolExecutionError(WEB_SEARCH_TOOL.name, "'query' must be a non-empty string")

        try:
            resp = await self._http.post(
                TAVILY_SEARCH_URL,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "query": query.strip(),
                    "max_results": self._max_results,
                    "include_answer": True,
                },
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ToolExecutionError(
                WEB_SEARCH_TOOL.name, f"search service returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ToolExecutionError(WEB_SEARCH_TOOL.name, f"search request failed: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise ToolExecutionError(WEB_SEARCH_TOOL.name, "search service returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise ToolExecutionError(WEB_SEARCH_TOOL.name, "search service returned an unexpected payload")

        logger.info("web_search %r -> %d results", query, len(body.get("results") or []))
        return _format_results(body)


__all__ = ["TavilySearchTool", "WEB_SEARCH_TOOL"]
