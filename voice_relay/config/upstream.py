"""Upstream realtime session configuration (env names and defaults)."""

from __future__ import annotations

ENV_REALTIME_MODEL = "REALTIME_MODEL"
ENV_REALTIME_VOICE = "REALTIME_VOICE"
ENV_REALTIME_URL = "REALTIME_URL"
ENV_REALTIME_TRANSCRIPTION_MODEL = "REALTIME_TRANSCRIPTION_MODEL"
ENV_REALTIME_CONNECT_TIMEOUT_S = "REALTIME_CONNECT_TIMEOUT_S"
ENV_SYSTEM_PROMPT = "SYSTEM_PROMPT"

DEFAULT_REALTIME_MODEL = "gpt-4o-realtime-preview"
DEFAULT_REALTIME_VOICE = "alloy"
DEFAULT_REALTIME_URL = "wss://api.openai.com/v1/realtime"
DEFAULT_REALTIME_TRANSCRIPTION_MODEL = "whisper-1"
DEFAULT_REALTIME_CONNECT_TIMEOUT_S = 10.0
DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful voice assistant. Keep responses concise and conversational, under 3 sentences "
    "unless asked for more detail. Always respond in the same language the user speaks."
)

# The beta event names this relay decodes are tied to this header value.
REALTIME_BETA_HEADER = ("OpenAI-Beta", "realtime=v1")

# Keepalive for the upstream socket.
REALTIME_PING_INTERVAL_S = 20.0
REALTIME_PING_TIMEOUT_S = 20.0
REALTIME_MAX_MESSAGE_BYTES = 16 * 1024 * 1024

__all__ = [
    "ENV_REALTIME_MODEL",
    "ENV_REALTIME_VOICE",
    "ENV_REALTIME_URL",
    "ENV_REALTIME_TRANSCRIPTION_MODEL",
    "ENV_REALTIME_CONNECT_TIMEOUT_S",
    "ENV_SYSTEM_PROMPT",
    "DEFAULT_REALTIME_MODEL",
    "DEFAULT_REALTIME_VOICE",
    "DEFAULT_REALTIME_URL",
    "DEFAULT_REALTIME_TRANSCRIPTION_MODEL",
    "DEFAULT_REALTIME_CONNECT_TIMEOUT_S",
    "DEFAULT_SYSTEM_PROMPT",
    "REALTIME_BETA_HEADER",
    "REALTIME_PING_INTERVAL_S",
    "REALTIME_PING_TIMEOUT_S",
    "REALTIME_MAX_MESSAGE_BYTES",
]
