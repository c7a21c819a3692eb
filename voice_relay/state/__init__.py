from .runtime import RuntimeDeps
from .settings import AppSettings
from .turn import TurnPhase, TurnState
from .connection import ConnectionState
from .tools import PendingToolCall, ToolDefinition, ToolParameter

__all__ = [
    "AppSettings",
    "ConnectionState",
    "PendingToolCall",
    "RuntimeDeps",
    "ToolDefinition",
    "ToolParameter",
    "TurnPhase",
    "TurnState",
]
