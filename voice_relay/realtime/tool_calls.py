"""Dispatch upstream function calls to the tool registry and return results."""

from __future__ import annotations

import logging
from typing import Any

import orjson

from voice_relay.state.tools import PendingToolCall
from voice_relay.tools.registry import ToolRegistry

from .upstream import UpstreamSession

logger = logging.getLogger(__name__)

RESPONSE_CREATE_EVENT: dict[str, Any] = {"type": "response.create"}


def parse_arguments(raw: str) -> dict[str, Any]:
    """Parse a function call's JSON arguments; anything unusable becomes ``{}``."""
    if not raw or not raw.strip():
        return {}
    try:
        args = orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.warning("tool arguments are not valid JSON; calling with no arguments: %.200s", raw)
        return {}
    if not isinstance(args, dict):
        logger.warning("tool arguments are not a JSON object; calling with no arguments: %.200s", raw)
        return {}
    return args


def build_function_output(call_id: str, output: str) -> dict[str, Any]:
    return {
        "type": "conversation.item.create",
        "item": {
            "type": "function_call_output",
            "call_id": call_id,
            "output": output,
        },
    }


class ToolCallDispatcher:
    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def execute(self, call: PendingToolCall) -> str:
        args = parse_arguments(call.arguments)
        logger.info("tool call %s(%s) call_id=%s", call.name, args, call.call_id)
        try:
            output = await self._registry.execute(call.name, args)
        except Exception as exc:
            logger.exception("tool registry failed for %s", call.name)
            output = f"Error executing tool '{call.name}': {exc}"
        logger.info("tool result %s call_id=%s: %.200s", call.name, call.call_id, output)
        return output

    async def submit(self, upstream: UpstreamSession, call_id: str, output: str) -> bool:
        """Send the tool output upstream as a ``function_call_output`` item.

        Results for a session that is not ready are dropped, never queued. The
        follow-up ``response.create`` is the caller's to send once no response
        is active upstream.
        """
        if not upstream.is_ready:
            logger.warning("upstream not ready; dropping tool result call_id=%s", call_id)
            return False
        if not await upstream.send(build_function_output(call_id, output)):
            logger.warning("failed to submit tool result call_id=%s", call_id)
            return False
        return True


__all__ = ["RESPONSE_CREATE_EVENT", "ToolCallDispatcher", "build_function_output", "parse_arguments"]
