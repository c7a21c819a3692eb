"""Audio re-framing between the device and the upstream session."""

from __future__ import annotations

import base64
import binascii
from typing import Any
from collections.abc import Iterator

from voice_relay.errors import DecodeError
from voice_relay.config.audio import AUDIO_FRAME_BYTES

from .client import ClientChannel


def decode_audio_delta(delta: str) -> bytes:
    """Decode an upstream base64 audio payload into raw PCM16 bytes."""
    try:
        return base64.b64decode(delta, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid base64 audio: {exc}") from exc


def iter_frames(data: bytes, frame_size: int = AUDIO_FRAME_BYTES) -> Iterator[bytes]:
    """Yield ``data`` in order as ``frame_size`` chunks; the last one may be shorter."""
    if frame_size <= 0:
        raise ValueError("frame_size must be positive")
    for start in range(0, len(data), frame_size):
        yield data[start : start + frame_size]


def build_append_event(frame: bytes) -> dict[str, Any]:
    """Wrap a raw device frame as an ``input_audio_buffer.append`` event."""
    return {
        "type": "input_audio_buffer.append",
        "audio": base64.b64encode(frame).decode("ascii"),
    }


async def relay_to_client(channel: ClientChannel, data: bytes, frame_size: int = AUDIO_FRAME_BYTES) -> int:
    """Send ``data`` to the device as binary frames; returns the number sent.

    Stops as soon as the device transport is no longer open.
    """
    sent = 0
    for frame in iter_frames(data, frame_size):
        if not channel.is_open:
            break
        if not await channel.send_audio(frame):
            break
        sent += 1
    return sent


__all__ = ["build_append_event", "decode_audio_delta", "iter_frames", "relay_to_client"]
