"""Client WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws/voice"

# Message keys
WS_KEY_TYPE = "type"
WS_KEY_MESSAGE = "message"
WS_KEY_TRANSCRIPT = "transcript"
WS_KEY_RESPONSE_TEXT = "response_text"

# Client -> server
WS_MSG_END_AUDIO = "end_audio"

# Server -> client
WS_MSG_METADATA = "metadata"
WS_MSG_END_RESPONSE = "end_response"
WS_MSG_ERROR = "error"

# Shown on the device until the real text is known.
WS_TEXT_PLACEHOLDER = "..."

# Close codes
WS_CLOSE_BUSY_CODE = 4002

# Error messages (sanitized, client-visible)
WS_ERROR_UPSTREAM_NOT_CONNECTED = "OpenAI not connected"
WS_ERROR_MISSING_CREDENTIAL = "OPENAI_API_KEY not set"
WS_ERROR_UPSTREAM_UNAVAILABLE = "OpenAI Realtime connection failed"
WS_ERROR_UPSTREAM_FALLBACK = "OpenAI Realtime error"
WS_ERROR_SERVER_AT_CAPACITY = "Server cannot accept new connections. Please try again later."

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_KEY_MESSAGE",
    "WS_KEY_TRANSCRIPT",
    "WS_KEY_RESPONSE_TEXT",
    "WS_MSG_END_AUDIO",
    "WS_MSG_METADATA",
    "WS_MSG_END_RESPONSE",
    "WS_MSG_ERROR",
    "WS_TEXT_PLACEHOLDER",
    "WS_CLOSE_BUSY_CODE",
    "WS_ERROR_UPSTREAM_NOT_CONNECTED",
    "WS_ERROR_MISSING_CREDENTIAL",
    "WS_ERROR_UPSTREAM_UNAVAILABLE",
    "WS_ERROR_UPSTREAM_FALLBACK",
    "WS_ERROR_SERVER_AT_CAPACITY",
]
