"""Error helpers for the device WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket

from voice_relay.config.websocket import WS_KEY_TYPE, WS_MSG_ERROR, WS_KEY_MESSAGE

logger = logging.getLogger(__name__)


def build_error_frame(message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_ERROR, WS_KEY_MESSAGE: message}


async def reject_connection(ws: WebSocket, *, message: str, close_code: int) -> None:
    # Accept so the device sees a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    try:
        await ws.send_text(orjson.dumps(build_error_frame(message)).decode("utf-8"))
    except Exception:
        logger.debug("reject: error frame send failed", exc_info=True)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = ["build_error_frame", "reject_connection"]
