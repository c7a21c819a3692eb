"""Registry of tools advertised to the upstream session."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

import orjson

from voice_relay.errors import ToolExecutionError
from voice_relay.state.tools import ToolDefinition

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class ToolRegistry:
    """Holds tool definitions and dispatches ``execute(name, args) -> str``.

    Shared read-only across all client sessions once built. ``execute`` never
    raises for tool failures: timeouts, unknown names and handler errors all
    come back as explanatory text so the conversation can continue.
    """

    def __init__(self, *, timeout_s: float) -> None:
        self._timeout_s = float(timeout_s)
        self._definitions: dict[str, ToolDefinition] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, definition: ToolDefinition, handler: ToolHandler) -> None:
        if definition.name in self._definitions:
            raise ValueError(f"tool '{definition.name}' is already registered")
        self._definitions[definition.name] = definition
        self._handlers[definition.name] = handler

    @property
    def has_tools(self) -> bool:
        return bool(self._definitions)

    def names(self) -> list[str]:
        return list(self._definitions)

    def declarations(self) -> list[dict[str, Any]]:
        return [definition.to_declaration() for definition in self._definitions.values()]

    async def execute(self, name: str, args: dict[str, Any]) -> str:
        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("tool call for unknown tool %r", name)
            return f"Tool '{name}' is not available."

        try:
            result = await asyncio.wait_for(handler(args), timeout=self._timeout_s)
        except TimeoutError:
            logger.warning("tool %s timed out after %.1fs", name, self._timeout_s)
            return f"Tool '{name}' timed out after {self._timeout_s:.0f} seconds."
        except ToolExecutionError as exc:
            logger.info("tool %s failed: %s", name, exc.message)
            return f"Tool '{name}' failed: {exc.message}"
        except Exception as exc:
            logger.exception("tool %s raised", name)
            return f"Error executing tool '{name}': {exc}"

        if isinstance(result, str):
            return result
        return orjson.dumps(result).decode("utf-8")


__all__ = ["ToolHandler", "ToolRegistry"]
