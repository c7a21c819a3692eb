"""Per-turn conversation state (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class TurnPhase(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    AWAITING_FIRST_AUDIO = "awaiting_first_audio"
    STREAMING = "streaming"
    COMPLETED = "completed"


@dataclass(slots=True)
class TurnState:
    """Ephemeral bookkeeping for one push-to-talk turn.

    Replaced wholesale on every ``end_audio``; never merged with the previous turn.
    """

    phase: TurnPhase = TurnPhase.IDLE
    input_transcript: str = ""
    response_transcript: str = ""
    metadata_sent: bool = False
    total_audio_bytes: int = 0
    started_at: float = 0.0
    first_audio_at: float | None = None


__all__ = ["TurnPhase", "TurnState"]
