"""Per-device relay session: owns the upstream connector and the current turn."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from collections.abc import Callable

from websockets.exceptions import WebSocketException

from voice_relay.state.turn import TurnState
from voice_relay.state.tools import PendingToolCall
from voice_relay.tools.registry import ToolRegistry
from voice_relay.state.settings import UpstreamSettings
from voice_relay.errors import DecodeError, UpstreamConfigError
from voice_relay.config.websocket import WS_ERROR_UPSTREAM_UNAVAILABLE, WS_ERROR_UPSTREAM_NOT_CONNECTED
from voice_relay.state.inbox import (
    InboxItem,
    ToolOutput,
    ClientAudio,
    ClientEndAudio,
    UpstreamClosed,
    UpstreamMessage,
)

from .client import ClientChannel
from .upstream import ConnectFn, UpstreamSession
from .audio import relay_to_client, build_append_event, decode_audio_delta
from .tool_calls import RESPONSE_CREATE_EVENT, ToolCallDispatcher
from .events import (
    AudioDone,
    AudioDelta,
    ResponseDone,
    SessionReady,
    Unrecognized,
    UpstreamError,
    UpstreamEvent,
    AudioTranscriptDelta,
    FunctionCallArgumentsDone,
    InputTranscriptionCompleted,
    decode_event,
)
from .turn import (
    begin_turn,
    record_audio,
    audio_seconds,
    complete_response,
    append_response_text,
    first_metadata_frame,
    record_input_transcript,
    followup_metadata_frame,
    mark_response_requested,
)

logger = logging.getLogger(__name__)

_COMMIT_EVENT = {"type": "input_audio_buffer.commit"}


class ClientSession:
    """Relay one device connection to one upstream realtime session.

    Device frames, upstream messages, upstream lifecycle notices and tool results
    are all posted to a single inbox and handled by one consumer task, so turn
    state is only ever touched from one place at a time.
    """

    def __init__(
        self,
        channel: ClientChannel,
        *,
        settings: UpstreamSettings,
        tool_registry: ToolRegistry,
        connect_fn: ConnectFn | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._channel = channel
        self._settings = settings
        self._tools_enabled = tool_registry.has_tools
        self._dispatcher = ToolCallDispatcher(tool_registry)
        self._clock = clock

        self._inbox: asyncio.Queue[InboxItem] = asyncio.Queue()
        self._consumer: asyncio.Task | None = None
        self._tool_tasks: set[asyncio.Task] = set()
        self._pending_calls: dict[str, PendingToolCall] = {}
        self._turn = TurnState()
        self._dropped_frames = 0
        self._response_active = False
        self._followup_due = False
        self._closed = False

        self.upstream = UpstreamSession(
            settings,
            tools=tool_registry.declarations(),
            on_message=lambda raw: self.post(UpstreamMessage(raw)),
            on_closed=lambda reason: self.post(UpstreamClosed(reason)),
            connect_fn=connect_fn,
        )

    @property
    def turn(self) -> TurnState:
        return self._turn

    @property
    def pending_tool_calls(self) -> dict[str, PendingToolCall]:
        return dict(self._pending_calls)

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        await self._ensure_upstream(report_errors=True)
        self._consumer = asyncio.create_task(self._run())

    def post(self, item: InboxItem) -> bool:
        if self._closed:
            return False
        self._inbox.put_nowait(item)
        return True

    async def _idle(self) -> None:
        """Wait until the inbox is drained and no tool call is still running."""
        while True:
            await self._inbox.join()
            if not self._tool_tasks:
                return
            await asyncio.gather(*list(self._tool_tasks), return_exceptions=True)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        consumer, self._consumer = self._consumer, None
        if consumer is not None:
            consumer.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await consumer

        await self.upstream.close()

        if self._tool_tasks:
            logger.info("session closed with %d tool call(s) in flight; results will be dropped", len(self._tool_tasks))
        self._pending_calls.clear()
        self._turn = TurnState()

    async def _run(self) -> None:
        while True:
            item = await self._inbox.get()
            try:
                await self._process(item)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("session failed to handle %s", type(item).__name__)
            finally:
                self._inbox.task_done()

    async def _process(self, item: InboxItem) -> None:
        if isinstance(item, ClientAudio):
            await self._on_client_audio(item.data)
        elif isinstance(item, ClientEndAudio):
            await self._on_end_audio()
        elif isinstance(item, UpstreamMessage):
            await self._on_upstream_message(item.raw)
        elif isinstance(item, ToolOutput):
            await self._on_tool_output(item)
        elif isinstance(item, UpstreamClosed):
            logger.info("upstream closed (%s); reconnecting on next turn", item.reason)
            self._response_active = False
            self._followup_due = False

    async def _ensure_upstream(self, *, report_errors: bool) -> None:
        try:
            await self.upstream.connect()
        except UpstreamConfigError as exc:
            logger.error("upstream: %s", exc)
            if report_errors:
                await self._channel.send_error(exc.message)
        except (OSError, WebSocketException) as exc:
            logger.error("upstream: connection failed: %s", exc)
            if report_errors:
                await self._channel.send_error(WS_ERROR_UPSTREAM_UNAVAILABLE)

    # Device side

    async def _on_client_audio(self, data: bytes) -> None:
        if not self.upstream.is_ready:
            self._dropped_frames += 1
            if self._dropped_frames == 1:
                logger.info("upstream not ready; dropping device audio")
            return
        self._dropped_frames = 0
        await self.upstream.send(build_append_event(data))

    async def _on_end_audio(self) -> None:
        self._turn = begin_turn(self._clock())

        if self.upstream.is_ready:
            logger.info("device: end audio, requesting response")
            await self.upstream.send(_COMMIT_EVENT)
            self._followup_due = False
            if await self.upstream.send(RESPONSE_CREATE_EVENT):
                self._response_active = True
                mark_response_requested(self._turn)
            return

        logger.warning("device: end audio while upstream is %s", self.upstream.state.value)
        await self._channel.send_error(WS_ERROR_UPSTREAM_NOT_CONNECTED)
        if not self.upstream.has_connection:
            await self._ensure_upstream(report_errors=False)

    # Upstream side

    async def _on_upstream_message(self, raw: str | bytes) -> None:
        try:
            event = decode_event(raw)
        except DecodeError as exc:
            logger.warning("discarding upstream message: %s", exc)
            return
        await self._route(event)

    async def _route(self, event: UpstreamEvent) -> None:
        if isinstance(event, SessionReady):
            self.upstream.mark_ready()
            logger.info("upstream: %s (voice=%s)", event.kind, self._settings.voice)
        elif isinstance(event, InputTranscriptionCompleted):
            logger.info("user: %r", event.transcript)
            if record_input_transcript(self._turn, event.transcript):
                await self._channel.send_json(followup_metadata_frame(self._turn))
        elif isinstance(event, AudioDelta):
            await self._on_audio_delta(event.delta)
        elif isinstance(event, AudioTranscriptDelta):
            append_response_text(self._turn, event.delta)
        elif isinstance(event, AudioDone):
            logger.info("upstream: audio done (%.1fs)", audio_seconds(self._turn))
        elif isinstance(event, FunctionCallArgumentsDone):
            self._dispatch_tool_call(event)
        elif isinstance(event, ResponseDone):
            await self._on_response_done(event)
        elif isinstance(event, UpstreamError):
            logger.error("upstream error: %s", event.message)
            await self._channel.send_error(event.message)
        elif isinstance(event, Unrecognized):
            logger.debug("upstream: ignoring %s", event.type)

    async def _on_audio_delta(self, delta: str) -> None:
        if not delta:
            return
        try:
            audio = decode_audio_delta(delta)
        except DecodeError as exc:
            logger.warning("discarding audio delta: %s", exc)
            return

        now = self._clock()
        if record_audio(self._turn, len(audio), now=now):
            logger.info("upstream: first audio in %.0fms", (now - self._turn.started_at) * 1000)
            await self._channel.send_json(first_metadata_frame(self._turn))
        await relay_to_client(self._channel, audio)

    async def _on_response_done(self, event: ResponseDone) -> None:
        self._response_active = False
        if not complete_response(self._turn, tools_enabled=self._tools_enabled, invoked_tool=event.invoked_tool):
            logger.info("upstream: intermediate response.done (tool=%s)", event.invoked_tool)
            await self._request_followup()
            return

        total_ms = (self._clock() - self._turn.started_at) * 1000
        logger.info(
            "turn complete: status=%s audio=%.1fs (%d bytes) total=%.0fms response=%r",
            event.status or "unknown",
            audio_seconds(self._turn),
            self._turn.total_audio_bytes,
            total_ms,
            self._turn.response_transcript,
        )
        await self._channel.send_end_response()

    # Tool calls

    def _dispatch_tool_call(self, event: FunctionCallArgumentsDone) -> None:
        call = PendingToolCall(call_id=event.call_id, name=event.name, arguments=event.arguments)
        self._pending_calls[call.call_id] = call
        task = asyncio.create_task(self._run_tool_call(call))
        self._tool_tasks.add(task)
        task.add_done_callback(self._tool_tasks.discard)

    async def _run_tool_call(self, call: PendingToolCall) -> None:
        output = await self._dispatcher.execute(call)
        if not self.post(ToolOutput(call_id=call.call_id, name=call.name, output=output)):
            logger.info("dropping result of %s call_id=%s: session closed", call.name, call.call_id)

    async def _on_tool_output(self, item: ToolOutput) -> None:
        self._pending_calls.pop(item.call_id, None)
        if await self._dispatcher.submit(self.upstream, item.call_id, item.output):
            logger.info("submitted %s result call_id=%s", item.name, item.call_id)
            self._followup_due = True
        await self._request_followup()

    async def _request_followup(self) -> None:
        """Ask for the reply that speaks submitted tool results.

        Sent once per batch, after every outstanding call has reported and no
        response is active upstream.
        """
        if not self._followup_due or self._response_active or self._pending_calls:
            return
        self._followup_due = False
        if await self.upstream.send(RESPONSE_CREATE_EVENT):
            self._response_active = True
            mark_response_requested(self._turn)


__all__ = ["ClientSession"]
