"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from voice_relay.config.secrets import ENV_OPENAI_API_KEY, ENV_TAVILY_API_KEY
from voice_relay.config.server import ENV_HOST, ENV_PORT, DEFAULT_HOST, DEFAULT_PORT
from voice_relay.config.limits import ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS
from voice_relay.state.settings import (
    AppSettings,
    ToolSettings,
    LimitsSettings,
    ServerSettings,
    UpstreamSettings,
)
from voice_relay.config.tools import (
    ENV_TOOLS_ENABLED,
    ENV_TOOL_TIMEOUT_S,
    DEFAULT_TOOLS_ENABLED,
    DEFAULT_TOOL_TIMEOUT_S,
    ENV_TAVILY_MAX_RESULTS,
    DEFAULT_TAVILY_MAX_RESULTS,
)
from voice_relay.config.upstream import (
    ENV_REALTIME_URL,
    ENV_SYSTEM_PROMPT,
    ENV_REALTIME_MODEL,
    ENV_REALTIME_VOICE,
    DEFAULT_REALTIME_URL,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_REALTIME_MODEL,
    DEFAULT_REALTIME_VOICE,
    ENV_REALTIME_CONNECT_TIMEOUT_S,
    ENV_REALTIME_TRANSCRIPTION_MODEL,
    DEFAULT_REALTIME_CONNECT_TIMEOUT_S,
    DEFAULT_REALTIME_TRANSCRIPTION_MODEL,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_upstream_settings() -> UpstreamSettings:
    connect_timeout = _float_env(ENV_REALTIME_CONNECT_TIMEOUT_S, DEFAULT_REALTIME_CONNECT_TIMEOUT_S)
    if connect_timeout <= 0:
        connect_timeout = DEFAULT_REALTIME_CONNECT_TIMEOUT_S

    return UpstreamSettings(
        api_key=(os.getenv(ENV_OPENAI_API_KEY) or "").strip(),
        url=_str_env(ENV_REALTIME_URL, DEFAULT_REALTIME_URL).rstrip("?"),
        model=_str_env(ENV_REALTIME_MODEL, DEFAULT_REALTIME_MODEL),
        voice=_str_env(ENV_REALTIME_VOICE, DEFAULT_REALTIME_VOICE),
        instructions=_str_env(ENV_SYSTEM_PROMPT, DEFAULT_SYSTEM_PROMPT),
        transcription_model=_str_env(ENV_REALTIME_TRANSCRIPTION_MODEL, DEFAULT_REALTIME_TRANSCRIPTION_MODEL),
        connect_timeout_s=connect_timeout,
    )


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    return LimitsSettings(max_concurrent_connections=max(1, max_connections))


def _load_tool_settings() -> ToolSettings:
    timeout_s = _float_env(ENV_TOOL_TIMEOUT_S, DEFAULT_TOOL_TIMEOUT_S)
    if timeout_s <= 0:
        timeout_s = DEFAULT_TOOL_TIMEOUT_S

    return ToolSettings(
        enabled=_bool_env(ENV_TOOLS_ENABLED, DEFAULT_TOOLS_ENABLED),
        timeout_s=timeout_s,
        tavily_api_key=(os.getenv(ENV_TAVILY_API_KEY) or "").strip(),
        tavily_max_results=max(1, _int_env(ENV_TAVILY_MAX_RESULTS, DEFAULT_TAVILY_MAX_RESULTS)),
    )


def _load_server_settings() -> ServerSettings:
    return ServerSettings(
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=_int_env(ENV_PORT, DEFAULT_PORT),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        upstream=_load_upstream_settings(),
        limits=_load_limits_settings(),
        tools=_load_tool_settings(),
        server=_load_server_settings(),
    )


__all__ = ["load_settings"]
