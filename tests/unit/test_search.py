from __future__ import annotations

import orjson
import httpx
import pytest

from voice_relay.errors import ToolExecutionError
from voice_relay.tools.search import TavilySearchTool


def _tool(handler) -> tuple[TavilySearchTool, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TavilySearchTool(http_client=client, api_key="tvly-test", max_results=2), client


@pytest.mark.asyncio
async def test_search_formats_answer_and_results() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "answer": "It is sunny.",
                "results": [
                    {"title": "Weather", "url": "https://example.com/w", "content": "Sunny all day"},
                    {"title": "Forecast", "url": "https://example.com/f", "content": "x" * 1000},
                ],
            },
        )

    tool, client = _tool(handler)
    async with client:
        result = await tool({"query": "  weather today "})

    lines = result.splitlines()
    assert lines[0] == "Answer: It is sunny."
    assert lines[1] == "- Weather (https://example.com/w): Sunny all day"
    assert lines[2] == "- Forecast (https://example.com/f): " + "x" * 400

    request = seen[0]
    assert request.headers["Authorization"] == "Bearer tvly-test"
    assert orjson.loads(request.content) == {"query": "weather today", "max_results": 2, "include_answer": True}


@pytest.mark.asyncio
async def test_search_without_results() -> None:
    tool, client = _tool(lambda _request: httpx.Response(200, json={"results": []}))
    async with client:
        assert await tool({"query": "nothing"}) == "No results found."


@pytest.mark.asyncio
async def test_search_http_error_raises_tool_error() -> None:
    tool, client = _tool(lambda _request: httpx.Response(401, json={"detail": "bad key"}))
    async with client:
        with pytest.raises(ToolExecutionError) as excinfo:
            await tool({"query": "anything"})
    assert "401" in excinfo.value.message


@pytest.mark.asyncio
async def test_search_requires_query() -> None:
    tool, client = _tool(lambda _request: httpx.Response(200, json={}))
    async with client:
        with pytest.raises(ToolExecutionError):
            await tool({})
