"""Device WebSocket receive loop for the voice relay (/ws/voice)."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable

from fastapi import WebSocket, WebSocketDisconnect

from voice_relay.realtime import ClientSession
from voice_relay.config.websocket import WS_KEY_TYPE, WS_MSG_END_AUDIO
from voice_relay.state.inbox import ClientAudio, ClientEndAudio

from .parser import parse_client_message

logger = logging.getLogger(__name__)

HandlerFn = Callable[[ClientSession, dict[str, Any]], None]


def _handle_end_audio(session: ClientSession, _msg: dict[str, Any]) -> None:
    session.post(ClientEndAudio())


HANDLERS: dict[str, HandlerFn] = {
    WS_MSG_END_AUDIO: _handle_end_audio,
}


def handle_text_frame(session: ClientSession, raw: str) -> None:
    try:
        msg = parse_client_message(raw)
    except ValueError as exc:
        logger.warning("device: ignoring malformed message: %s", exc)
        return

    handler = HANDLERS.get(msg[WS_KEY_TYPE])
    if handler is None:
        logger.info("device: ignoring message type %r", msg[WS_KEY_TYPE])
        return
    handler(session, msg)


async def run_message_loop(ws: WebSocket, session: ClientSession) -> None:
    """Feed device frames into ``session`` until the device disconnects."""
    try:
        while True:
            message = await ws.receive()
            if message.get("type") == "websocket.disconnect":
                logger.info("device: disconnected (code %s)", message.get("code"))
                return

            data = message.get("bytes")
            if data is not None:
                session.post(ClientAudio(data))
                continue

            text = message.get("text")
            if text is not None:
                handle_text_frame(session, text)
    except WebSocketDisconnect as exc:
        logger.info("device: disconnected (code %s)", exc.code)


__all__ = ["HANDLERS", "handle_text_frame", "run_message_loop"]
