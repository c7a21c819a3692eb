"""Per-device WebSocket handler: admission, session wiring and teardown."""

from __future__ import annotations

import time
import logging
import contextlib

from fastapi import WebSocket

from voice_relay.state import RuntimeDeps
from voice_relay.realtime.upstream import ConnectFn
from voice_relay.realtime import ClientChannel, ClientSession
from voice_relay.config.websocket import WS_CLOSE_BUSY_CODE, WS_ERROR_SERVER_AT_CAPACITY

from .errors import reject_connection
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


def _peer(ws: WebSocket) -> str:
    client = getattr(ws, "client", None)
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"


async def _admit(ws: WebSocket, runtime_deps: RuntimeDeps, peer: str) -> bool:
    connections = runtime_deps.connections
    if not await connections.admit(ws, peer=peer):
        logger.warning("device %s rejected: %d/%d devices connected", peer, connections.active_count, connections.capacity)
        await reject_connection(ws, message=WS_ERROR_SERVER_AT_CAPACITY, close_code=WS_CLOSE_BUSY_CODE)
        return False

    try:
        await ws.accept()
    except Exception:
        await connections.release(ws)
        raise
    return True


async def handle_websocket_connection(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    *,
    connect_fn: ConnectFn | None = None,
) -> None:
    peer = _peer(ws)
    if not await _admit(ws, runtime_deps, peer):
        return

    channel = ClientChannel(ws)
    channel.mark_open()
    logger.info("device %s connected (%d active)", peer, runtime_deps.connections.active_count)

    session = ClientSession(
        channel,
        settings=runtime_deps.settings.upstream,
        tool_registry=runtime_deps.tool_registry,
        connect_fn=connect_fn,
    )
    try:
        await session.start()
        await run_message_loop(ws, session)
    finally:
        channel.mark_closed()
        with contextlib.suppress(Exception):
            await session.close()
        slot = await runtime_deps.connections.release(ws)
        held_s = time.monotonic() - slot.admitted_at if slot is not None else 0.0
        logger.info(
            "device %s disconnected after %.1fs (%d active)",
            peer,
            held_s,
            runtime_deps.connections.active_count,
        )


__all__ = ["handle_websocket_connection"]
