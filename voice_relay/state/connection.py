"""Transport lifecycle states (enums only)."""

from __future__ import annotations

from enum import Enum


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


__all__ = ["ConnectionState"]
