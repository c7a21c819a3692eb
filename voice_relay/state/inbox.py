"""Messages posted to a client session's inbox (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClientAudio:
    data: bytes


@dataclass(frozen=True, slots=True)
class ClientEndAudio:
    pass


@dataclass(frozen=True, slots=True)
class UpstreamMessage:
    raw: str | bytes


@dataclass(frozen=True, slots=True)
class UpstreamClosed:
    reason: str


@dataclass(frozen=True, slots=True)
class ToolOutput:
    call_id: str
    name: str
    output: str


InboxItem = ClientAudio | ClientEndAudio | UpstreamMessage | UpstreamClosed | ToolOutput

__all__ = [
    "ClientAudio",
    "ClientEndAudio",
    "InboxItem",
    "ToolOutput",
    "UpstreamClosed",
    "UpstreamMessage",
]
