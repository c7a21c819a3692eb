"""Tool contract objects (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToolParameter:
    name: str
    type: str
    description: str
    required: bool = True


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = ()

    def to_declaration(self) -> dict[str, Any]:
        """Render the declaration the upstream session expects in ``session.tools``."""
        return {
            "type": "function",
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {p.name: {"type": p.type, "description": p.description} for p in self.parameters},
                "required": [p.name for p in self.parameters if p.required],
            },
        }


@dataclass(frozen=True, slots=True)
class PendingToolCall:
    call_id: str
    name: str
    arguments: str


__all__ = ["PendingToolCall", "ToolDefinition", "ToolParameter"]
