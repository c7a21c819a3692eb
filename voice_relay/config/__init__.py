"""Configuration module exports (env names and defaults only)."""

from .websocket import WS_ENDPOINT_PATH
from .audio import AUDIO_FRAME_BYTES, AUDIO_SAMPLE_RATE_HZ

__all__ = [
    "AUDIO_FRAME_BYTES",
    "AUDIO_SAMPLE_RATE_HZ",
    "WS_ENDPOINT_PATH",
]
