from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from voice_relay.tools.arithmetic import add
from voice_relay.errors import ToolExecutionError
from voice_relay.tools.registry import ToolRegistry
from voice_relay.state.settings import ToolSettings
from voice_relay.tools import build_tool_registry
from voice_relay.state.tools import ToolParameter, ToolDefinition

_ECHO = ToolDefinition(
    name="echo",
    description="Echo the input",
    parameters=(
        ToolParameter(name="text", type="string", description="Text to echo"),
        ToolParameter(name="times", type="integer", description="Repeat count", required=False),
    ),
)


async def _echo(args: dict[str, Any]) -> Any:
    return {"echo": args.get("text")}


def _settings(**overrides: Any) -> ToolSettings:
    values = {"enabled": True, "timeout_s": 1.0, "tavily_api_key": "", "tavily_max_results": 3}
    values.update(overrides)
    return ToolSettings(**values)


def test_declaration_shape() -> None:
    assert _ECHO.to_declaration() == {
        "type": "function",
        "name": "echo",
        "description": "Echo the input",
        "parameters": {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to echo"},
                "times": {"type": "integer", "description": "Repeat count"},
            },
            "required": ["text"],
        },
    }


def test_duplicate_registration_rejected() -> None:
    registry = ToolRegistry(timeout_s=1.0)
    registry.register(_ECHO, _echo)
    with pytest.raises(ValueError):
        registry.register(_ECHO, _echo)


@pytest.mark.asyncio
async def test_non_string_results_are_json_encoded() -> None:
    registry = ToolRegistry(timeout_s=1.0)
    registry.register(_ECHO, _echo)
    assert await registry.execute("echo", {"text": "hi"}) == '{"echo":"hi"}'


@pytest.mark.asyncio
async def test_unknown_tool_returns_text() -> None:
    registry = ToolRegistry(timeout_s=1.0)
    assert await registry.execute("nope", {}) == "Tool 'nope' is not available."


@pytest.mark.asyncio
async def test_timeout_returns_text() -> None:
    async def _slow(_args: dict[str, Any]) -> str:
        await asyncio.sleep(5)
        return "late"

    registry = ToolRegistry(timeout_s=0.05)
    registry.register(ToolDefinition(name="slow", description="Sleeps"), _slow)

    result = await registry.execute("slow", {})
    assert result.startswith("Tool 'slow' timed out")


@pytest.mark.asyncio
async def test_handler_errors_return_text() -> None:
    async def _fails(_args: dict[str, Any]) -> str:
        raise ToolExecutionError("fails", "upstream said no")

    async def _crashes(_args: dict[str, Any]) -> str:
        raise RuntimeError("boom")

    registry = ToolRegistry(timeout_s=1.0)
    registry.register(ToolDefinition(name="fails", description=""), _fails)
    registry.register(ToolDefinition(name="crashes", description=""), _crashes)

    assert await registry.execute("fails", {}) == "Tool 'fails' failed: upstream said no"
    assert await registry.execute("crashes", {}) == "Error executing tool 'crashes': boom"


@pytest.mark.asyncio
async def test_add_tool() -> None:
    assert await add({"a": 2, "b": 3}) == "5"
    assert await add({"a": 1.5, "b": 1.5}) == "3"
    assert await add({"a": 0.1, "b": 2}) == "2.1"
    with pytest.raises(ToolExecutionError):
        await add({"a": "2", "b": 3})
    with pytest.raises(ToolExecutionError):
        await add({"a": True, "b": 3})


@pytest.mark.asyncio
async def test_build_registry_respects_settings() -> None:
    async with httpx.AsyncClient() as client:
        assert not build_tool_registry(_settings(enabled=False), http_client=client).has_tools
        assert build_tool_registry(_settings(), http_client=client).names() == ["add"]
        registry = build_tool_registry(_settings(tavily_api_key="tvly-test"), http_client=client)
        assert registry.names() == ["add", "web_search"]
