"""Session configuration handshake sent when the upstream connection opens."""

from __future__ import annotations

from typing import Any

from voice_relay.state.settings import UpstreamSettings
from voice_relay.config.audio import UPSTREAM_AUDIO_FORMAT


def build_session_update(settings: UpstreamSettings, tools: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "type": "session.update",
        "session": {
            "modalities": ["text", "audio"],
            "instructions": settings.instructions,
            "voice": settings.voice,
            "input_audio_format": UPSTREAM_AUDIO_FORMAT,
            "output_audio_format": UPSTREAM_AUDIO_FORMAT,
            "input_audio_transcription": {"model": settings.transcription_model},
            # Push-to-talk: only the device's end_audio ends a user turn.
            "turn_detection": None,
            "tools": list(tools),
            "tool_choice": "auto" if tools else "none",
        },
    }


def build_upstream_url(settings: UpstreamSettings) -> str:
    return f"{settings.url}?model={settings.model}"


__all__ = ["build_session_update", "build_upstream_url"]
