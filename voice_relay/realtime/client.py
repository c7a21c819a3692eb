"""Device-facing side of a relay session."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from voice_relay.state.connection import ConnectionState
from voice_relay.config.websocket import WS_KEY_TYPE, WS_MSG_ERROR, WS_KEY_MESSAGE, WS_MSG_END_RESPONSE

logger = logging.getLogger(__name__)


class ClientChannel:
    """Wrap the device WebSocket with open-state tracking and non-raising sends.

    Every ``send_*`` returns False instead of raising once the device is gone,
    and the channel then stays closed.
    """

    def __init__(self, ws: WebSocket) -> None:
        self._ws = ws
        self._state = ConnectionState.CONNECTING

    @property
    def is_open(self) -> bool:
        if self._state is not ConnectionState.OPEN:
            return False
        return (
            self._ws.client_state == WebSocketState.CONNECTED
            and self._ws.application_state == WebSocketState.CONNECTED
        )

    def mark_open(self) -> None:
        if self._state is ConnectionState.CONNECTING:
            self._state = ConnectionState.OPEN

    def mark_closed(self) -> None:
        self._state = ConnectionState.CLOSED

    async def send_json(self, data: dict[str, Any]) -> bool:
        if not self.is_open:
            return False
        try:
            await self._ws.send_text(orjson.dumps(data).decode("utf-8"))
        except WebSocketDisconnect:
            self.mark_closed()
            return False
        except Exception:
            logger.debug("device text send failed", exc_info=True)
            self.mark_closed()
            return False
        return True

    async def send_audio(self, frame: bytes) -> bool:
        if not self.is_open:
            return False
        try:
            await self._ws.send_bytes(frame)
        except WebSocketDisconnect:
            self.mark_closed()
            return False
        except Exception:
            logger.debug("device audio send failed", exc_info=True)
            self.mark_closed()
            return False
        return True

    async def send_error(self, message: str) -> bool:
        return await self.send_json({WS_KEY_TYPE: WS_MSG_ERROR, WS_KEY_MESSAGE: message})

    async def send_end_response(self) -> bool:
        return await self.send_json({WS_KEY_TYPE: WS_MSG_END_RESPONSE})


__all__ = ["ClientChannel"]
