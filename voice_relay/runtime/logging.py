"""Logging initialization."""

from __future__ import annotations

import os
import logging

from voice_relay.config.logging import LOG_LEVEL, LOG_FORMAT, ENV_SHOW_THIRD_PARTY_LOGS

_NOISY_LOGGERS = ("websockets", "httpx", "httpcore")


def configure_logging() -> None:
    # Per-frame websocket and HTTP client logs drown out turn diagnostics.
    if (os.getenv(ENV_SHOW_THIRD_PARTY_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
