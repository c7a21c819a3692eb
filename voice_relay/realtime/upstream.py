"""Connector for the upstream realtime speech-to-speech session."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

import orjson
import websockets
from websockets.exceptions import ConnectionClosed

from voice_relay.errors import UpstreamConfigError
from voice_relay.state.settings import UpstreamSettings
from voice_relay.state.connection import ConnectionState
from voice_relay.config.websocket import WS_ERROR_MISSING_CREDENTIAL
from voice_relay.config.upstream import (
    REALTIME_BETA_HEADER,
    REALTIME_PING_TIMEOUT_S,
    REALTIME_PING_INTERVAL_S,
    REALTIME_MAX_MESSAGE_BYTES,
)

from .handshake import build_upstream_url, build_session_update

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Awaitable[Any]]


class UpstreamSession:
    """One upstream realtime connection, re-openable on demand.

    ``is_ready`` is the only readiness check callers use: it turns true once the
    upstream acknowledges the session (``session.created`` / ``session.updated``)
    and false as soon as the transport closes. Sends while not ready are no-ops.
    """

    def __init__(
        self,
        settings: UpstreamSettings,
        *,
        tools: list[dict[str, Any]],
        on_message: Callable[[str | bytes], None],
        on_closed: Callable[[str], None],
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self._settings = settings
        self._tools = list(tools)
        self._on_message = on_message
        self._on_closed = on_closed
        self._connect_fn = connect_fn or websockets.connect

        self._ws: Any | None = None
        self._reader: asyncio.Task | None = None
        self._connecting = False
        self._session_ready = False
        self._closing = False

    @property
    def state(self) -> ConnectionState:
        if self._ws is not None:
            return ConnectionState.OPEN
        if self._connecting:
            return ConnectionState.CONNECTING
        return ConnectionState.CLOSED

    @property
    def has_connection(self) -> bool:
        return self._ws is not None or self._connecting

    @property
    def is_ready(self) -> bool:
        return self._ws is not None and self._session_ready

    def mark_ready(self) -> None:
        if self._ws is not None:
            self._session_ready = True

    async def connect(self) -> None:
        """Open the transport and send the session handshake.

        Raises ``UpstreamConfigError`` without a credential; transport failures
        propagate as ``OSError`` / ``websockets`` exceptions.
        """
        if self.has_connection:
            return
        if not self._settings.api_key:
            raise UpstreamConfigError(WS_ERROR_MISSING_CREDENTIAL)

        self._closing = False
        self._connecting = True
        logger.info("upstream: connecting to %s", self._settings.model)
        try:
            ws = await self._connect_fn(
                build_upstream_url(self._settings),
                additional_headers=[
                    ("Authorization", f"Bearer {self._settings.api_key}"),
                    REALTIME_BETA_HEADER,
                ],
                open_timeout=self._settings.connect_timeout_s,
                ping_interval=REALTIME_PING_INTERVAL_S,
                ping_timeout=REALTIME_PING_TIMEOUT_S,
                max_size=REALTIME_MAX_MESSAGE_BYTES,
            )
        finally:
            self._connecting = False

        if self._closing:
            # Torn down while the handshake was in flight.
            with contextlib.suppress(Exception):
                await ws.close()
            return

        self._ws = ws
        self._session_ready = False
        logger.info("upstream: connected, configuring session (tools=%d)", len(self._tools))
        try:
            await ws.send(orjson.dumps(build_session_update(self._settings, self._tools)).decode("utf-8"))
        except Exception:
            self._ws = None
            with contextlib.suppress(Exception):
                await ws.close()
            raise
        self._reader = asyncio.create_task(self._read_loop(ws))

    async def send(self, event: dict[str, Any]) -> bool:
        if not self.is_ready:
            return False
        ws = self._ws
        try:
            await ws.send(orjson.dumps(event).decode("utf-8"))
        except ConnectionClosed:
            logger.warning("upstream: send of %s after close", event.get("type"))
            return False
        return True

    async def _read_loop(self, ws: Any) -> None:
        reason = "closed"
        try:
            async for message in ws:
                self._on_message(message)
            reason = f"closed (code {getattr(ws, 'close_code', None)})"
        except ConnectionClosed as exc:
            reason = f"connection lost: {exc}"
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("upstream reader failed")
            reason = f"error: {exc}"
        finally:
            if self._ws is ws:
                self._ws = None
                self._session_ready = False
            if not self._closing:
                logger.info("upstream: disconnected (%s)", reason)
                self._on_closed(reason)

    async def close(self) -> None:
        """Close the transport if one is open; safe to call repeatedly."""
        self._closing = True
        self._session_ready = False
        ws, self._ws = self._ws, None
        reader, self._reader = self._reader, None

        if ws is not None:
            logger.info("upstream: closing")
            with contextlib.suppress(Exception):
                await ws.close()
        if reader is not None and reader is not asyncio.current_task():
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await reader


__all__ = ["ConnectFn", "UpstreamSession"]
