"""Admission control configuration (env names and defaults)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"

# Each device holds one upstream realtime session open, so keep this small.
DEFAULT_MAX_CONCURRENT_CONNECTIONS = 16

__all__ = ["DEFAULT_MAX_CONCURRENT_CONNECTIONS", "ENV_MAX_CONCURRENT_CONNECTIONS"]
