"""Turn lifecycle transitions over ``TurnState``.

Every function here either returns a fresh state or mutates the one it is
given; the owning session holds the only reference.
"""

from __future__ import annotations

from typing import Any

from voice_relay.state.turn import TurnPhase, TurnState
from voice_relay.config.audio import AUDIO_BYTES_PER_SECOND
from voice_relay.config.websocket import (
    WS_KEY_TYPE,
    WS_MSG_METADATA,
    WS_KEY_TRANSCRIPT,
    WS_TEXT_PLACEHOLDER,
    WS_KEY_RESPONSE_TEXT,
)


def begin_turn(now: float) -> TurnState:
    """Start a new turn, abandoning whatever the previous one was doing."""
    return TurnState(phase=TurnPhase.ARMED, started_at=now)


def mark_response_requested(state: TurnState) -> None:
    if state.phase is TurnPhase.ARMED:
        state.phase = TurnPhase.AWAITING_FIRST_AUDIO


def record_audio(state: TurnState, num_bytes: int, *, now: float) -> bool:
    """Account for decoded response audio.

    Returns True exactly once per turn, on the first audio, when the caller
    must send the metadata frame.
    """
    state.total_audio_bytes += max(0, int(num_bytes))
    if state.metadata_sent:
        return False
    state.metadata_sent = True
    state.first_audio_at = now
    state.phase = TurnPhase.STREAMING
    return True


def record_input_transcript(state: TurnState, transcript: str) -> bool:
    """Store the user transcript; True when a follow-up metadata frame is due."""
    state.input_transcript = transcript
    return state.metadata_sent


def append_response_text(state: TurnState, delta: str) -> None:
    state.response_transcript += delta


def complete_response(state: TurnState, *, tools_enabled: bool, invoked_tool: bool = False) -> bool:
    """Handle ``response.done``; True when the turn ends and ``end_response`` is due.

    With tools advertised, a response that invoked a tool or produced no audio
    is intermediate: the spoken reply comes in a later response within the same
    turn. Once such a turn has completed, further responses never end it again.
    """
    if not tools_enabled:
        state.phase = TurnPhase.COMPLETED
        return True
    if state.phase is TurnPhase.COMPLETED:
        return False
    if invoked_tool or state.total_audio_bytes == 0:
        return False
    state.phase = TurnPhase.COMPLETED
    return True


def first_metadata_frame(state: TurnState) -> dict[str, Any]:
    return {
        WS_KEY_TYPE: WS_MSG_METADATA,
        WS_KEY_TRANSCRIPT: state.input_transcript or WS_TEXT_PLACEHOLDER,
        WS_KEY_RESPONSE_TEXT: WS_TEXT_PLACEHOLDER,
    }


def followup_metadata_frame(state: TurnState) -> dict[str, Any]:
    return {
        WS_KEY_TYPE: WS_MSG_METADATA,
        WS_KEY_TRANSCRIPT: state.input_transcript,
        WS_KEY_RESPONSE_TEXT: state.response_transcript or WS_TEXT_PLACEHOLDER,
    }


def audio_seconds(state: TurnState) -> float:
    return state.total_audio_bytes / AUDIO_BYTES_PER_SECOND


__all__ = [
    "append_response_text",
    "audio_seconds",
    "begin_turn",
    "complete_response",
    "first_metadata_frame",
    "followup_metadata_frame",
    "mark_response_requested",
    "record_audio",
    "record_input_transcript",
]
