"""
signature_pad/models/pad_events.py

Event objects delivered to engine subscribers.

The engine owns the pad state. UI layers and auditing hooks subscribe to
these events to react to transitions, denied actions and surface changes
without reaching into the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional

from .pad_state import PadState


PadEventType = Literal[
    "state_changed",
    "permission_denied",
    "resize_stale",
    "surface_changed",
    "exported",
]


@dataclass(frozen=True, slots=True)
class PadEvent:
    """Represents one observable change (or refusal) of the pad."""

    type: PadEventType
    action: str
    state: PadState
    reason: Optional[str] = None
    ts_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
