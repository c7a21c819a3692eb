"""Audio framing constants shared by both relay directions."""

from __future__ import annotations

# Device and upstream both speak PCM16 mono @ 24kHz.
AUDIO_SAMPLE_RATE_HZ: int = 24000
AUDIO_SAMPLE_WIDTH_BYTES: int = 2
AUDIO_BYTES_PER_SECOND: int = AUDIO_SAMPLE_RATE_HZ * AUDIO_SAMPLE_WIDTH_BYTES

# Binary frames sent to the device never exceed this size.
AUDIO_FRAME_BYTES: int = 1024

# Upstream transport encoding for audio in both directions.
UPSTREAM_AUDIO_FORMAT: str = "pcm16"

__all__ = [
    "AUDIO_BYTES_PER_SECOND",
    "AUDIO_FRAME_BYTES",
    "AUDIO_SAMPLE_RATE_HZ",
    "AUDIO_SAMPLE_WIDTH_BYTES",
    "UPSTREAM_AUDIO_FORMAT",
]
