"""Decode upstream realtime messages into a closed set of typed events."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from voice_relay.errors import DecodeError
from voice_relay.config.websocket import WS_ERROR_UPSTREAM_FALLBACK


@dataclass(frozen=True, slots=True)
class SessionReady:
    kind: str


@dataclass(frozen=True, slots=True)
class InputTranscriptionCompleted:
    transcript: str


@dataclass(frozen=True, slots=True)
class AudioDelta:
    delta: str


@dataclass(frozen=True, slots=True)
class AudioTranscriptDelta:
    delta: str


@dataclass(frozen=True, slots=True)
class AudioDone:
    pass


@dataclass(frozen=True, slots=True)
class FunctionCallArgumentsDone:
    call_id: str
    name: str
    arguments: str


@dataclass(frozen=True, slots=True)
class ResponseDone:
    status: str
    invoked_tool: bool = False


@dataclass(frozen=True, slots=True)
class UpstreamError:
    message: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    type: str


UpstreamEvent = (
    SessionReady
    | InputTranscriptionCompleted
    | AudioDelta
    | AudioTranscriptDelta
    | AudioDone
    | FunctionCallArgumentsDone
    | ResponseDone
    | UpstreamError
    | Unrecognized
)


def _str_field(event: dict[str, Any], key: str) -> str:
    value = event.get(key)
    return value if isinstance(value, str) else ""


def _session_ready(event: dict[str, Any]) -> UpstreamEvent:
    return SessionReady(kind=_str_field(event, "type"))


def _input_transcription(event: dict[str, Any]) -> UpstreamEvent:
    return InputTranscriptionCompleted(transcript=_str_field(event, "transcript"))


def _audio_delta(event: dict[str, Any]) -> UpstreamEvent:
    return AudioDelta(delta=_str_field(event, "delta"))


def _transcript_delta(event: dict[str, Any]) -> UpstreamEvent:
    return AudioTranscriptDelta(delta=_str_field(event, "delta"))


def _audio_done(_event: dict[str, Any]) -> UpstreamEvent:
    return AudioDone()


def _function_call_done(event: dict[str, Any]) -> UpstreamEvent:
    return FunctionCallArgumentsDone(
        call_id=_str_field(event, "call_id"),
        name=_str_field(event, "name"),
        arguments=_str_field(event, "arguments"),
    )


def _response_done(event: dict[str, Any]) -> UpstreamEvent:
    response = event.get("response")
    if not isinstance(response, dict):
        return ResponseDone(status="")
    status = response.get("status")
    output = response.get("output")
    invoked_tool = isinstance(output, list) and any(
        isinstance(item, dict) and item.get("type") == "function_call" for item in output
    )
    return ResponseDone(status=status if isinstance(status, str) else "", invoked_tool=invoked_tool)


def _error(event: dict[str, Any]) -> UpstreamEvent:
    # Only the human-readable message ever leaves the server.
    error = event.get("error")
    message = error.get("message") if isinstance(error, dict) else None
    if not isinstance(message, str) or not message.strip():
        message = WS_ERROR_UPSTREAM_FALLBACK
    return UpstreamError(message=message)


_DECODERS = {
    "session.created": _session_ready,
    "session.updated": _session_ready,
    "conversation.item.input_audio_transcription.completed": _input_transcription,
    "response.audio.delta": _audio_delta,
    "response.output_audio.delta": _audio_delta,
    "response.audio_transcript.delta": _transcript_delta,
    "response.output_audio_transcript.delta": _transcript_delta,
    "response.audio.done": _audio_done,
    "response.output_audio.done": _audio_done,
    "response.function_call_arguments.done": _function_call_done,
    "response.done": _response_done,
    "error": _error,
}


def decode_event(raw: str | bytes) -> UpstreamEvent:
    """Parse one upstream message.

    Raises ``DecodeError`` when the message is not a JSON object with a string
    ``type``. Well-formed events with a type this relay does not handle come back
    as ``Unrecognized`` so newer upstream event types pass through harmlessly.
    """
    try:
        event = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(event, dict):
        raise DecodeError("event must be a JSON object")

    event_type = event.get("type")
    if not isinstance(event_type, str) or not event_type:
        raise DecodeError("event missing non-empty 'type'")

    decoder = _DECODERS.get(event_type)
    if decoder is None:
        return Unrecognized(type=event_type)
    return decoder(event)


__all__ = [
    "AudioDelta",
    "AudioDone",
    "AudioTranscriptDelta",
    "FunctionCallArgumentsDone",
    "InputTranscriptionCompleted",
    "ResponseDone",
    "SessionReady",
    "Unrecognized",
    "UpstreamError",
    "UpstreamEvent",
    "decode_event",
]
