"""Shared error types for the voice relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DecodeError(Exception):
    """Raised when an inbound message cannot be parsed as structured data."""

    reason: str
    source: str = "upstream"

    def __str__(self) -> str:
        return f"{self.source} decode error: {self.reason}"


@dataclass(frozen=True, slots=True)
class UpstreamConfigError(Exception):
    """Raised when the upstream session cannot be configured (e.g. missing credential)."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ToolExecutionError(Exception):
    """Raised by tool handlers; the registry turns it into a result string."""

    tool_name: str
    message: str

    def __str__(self) -> str:
        return f"{self.tool_name}: {self.message}"


__all__ = ["DecodeError", "ToolExecutionError", "UpstreamConfigError"]
