from __future__ import annotations

from typing import Any

import pytest

from voice_relay.state.tools import PendingToolCall
from voice_relay.tools.registry import ToolRegistry
from voice_relay.tools.arithmetic import ADD_TOOL, add
from voice_relay.realtime.tool_calls import ToolCallDispatcher, parse_arguments, build_function_output


class _FakeUpstream:
    def __init__(self, *, ready: bool) -> None:
        self.is_ready = ready
        self.sent: list[dict[str, Any]] = []

    async def send(self, event: dict[str, Any]) -> bool:
        self.sent.append(event)
        return True


def _dispatcher() -> ToolCallDispatcher:
    registry = ToolRegistry(timeout_s=1.0)
    registry.register(ADD_TOOL, add)
    return ToolCallDispatcher(registry)


@pytest.mark.parametrize("raw", ["", "   ", "{not json", "[1, 2]", '"text"'])
def test_unusable_arguments_become_empty(raw: str) -> None:
    assert parse_arguments(raw) == {}


def test_arguments_parse() -> None:
    assert parse_arguments('{"a": 1, "b": 2}') == {"a": 1, "b": 2}


@pytest.mark.asyncio
async def test_execute_returns_result_text() -> None:
    call = PendingToolCall(call_id="c1", name="add", arguments='{"a": 2, "b": 2}')
    assert await _dispatcher().execute(call) == "4"


@pytest.mark.asyncio
async def test_execute_with_garbled_arguments_still_answers() -> None:
    call = PendingToolCall(call_id="c1", name="add", arguments="{{{")
    assert await _dispatcher().execute(call) == "Tool 'add' failed: 'a' must be a number"


@pytest.mark.asyncio
async def test_submit_sends_only_function_output() -> None:
    upstream = _FakeUpstream(ready=True)

    assert await _dispatcher().submit(upstream, "c9", "4") is True  # type: ignore[arg-type]
    assert upstream.sent == [build_function_output("c9", "4")]
    assert upstream.sent[0]["item"] == {"type": "function_call_output", "call_id": "c9", "output": "4"}


@pytest.mark.asyncio
async def test_submit_drops_result_when_not_ready() -> None:
    upstream = _FakeUpstream(ready=False)

    assert await _dispatcher().submit(upstream, "c9", "4") is False  # type: ignore[arg-type]
    assert upstream.sent == []
