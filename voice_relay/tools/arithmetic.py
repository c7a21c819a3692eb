"""Arithmetic tool."""

from __future__ import annotations

from typing import Any

from voice_relay.errors import ToolExecutionError
from voice_relay.state.tools import ToolParameter, ToolDefinition

ADD_TOOL = ToolDefinition(
    name="add",
    description=(
        "Add two numbers. Please let the user know that you're adding the numbers BEFORE you call the tool"
    ),
    parameters=(
        ToolParameter(name="a", type="number", description="First addend"),
        ToolParameter(name="b", type="number", description="Second addend"),
    ),
)


def _as_number(args: dict[str, Any], key: str) -> float | int:
    value = args.get(key)
    # bool is an int subclass; "true + 1" is not a sum the user asked for.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolExecutionError(ADD_TOOL.name, f"'{key}' must be a number")
    return value


def _format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


async def add(args: dict[str, Any]) -> str:
    return _format_number(_as_number(args, "a") + _as_number(args, "b"))


__all__ = ["ADD_TOOL", "add"]
