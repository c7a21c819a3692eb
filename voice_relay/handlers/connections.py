"""Device admission control.

Each admitted device keeps its own upstream realtime session open, so the
admission cap also bounds how many upstream sessions this process holds.
"""

from __future__ import annotations

import time
import asyncio
from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeviceSlot:
    peer: str
    admitted_at: float


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._capacity = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._slots: dict[int, DeviceSlot] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def active_count(self) -> int:
        return len(self._slots)

    async def admit(self, ws: Any, *, peer: str = "unknown") -> bool:
        """Reserve a slot for ``ws`` before the handshake is accepted; False when full."""
        async with self._lock:
            if id(ws) in self._slots:
                return True
            if len(self._slots) >= self._capacity:
                return False
            self._slots[id(ws)] = DeviceSlot(peer=peer, admitted_at=time.monotonic())
            return True

    async def release(self, ws: Any) -> DeviceSlot | None:
        async with self._lock:
            return self._slots.pop(id(ws), None)


__all__ = ["ConnectionManager", "DeviceSlot"]
