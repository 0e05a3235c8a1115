# signature_pad/models/input_events.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union

from .signature_enums import InputKind


@dataclass(frozen=True)
class PointerEvent:
    """Mouse/pen event carrying a raw viewport coordinate."""
    kind: InputKind
    x: float
    y: float


@dataclass(frozen=True)
class TouchPoint:
    """One contact of a touch event, in viewport coordinates."""
    x: float
    y: float
    identifier: int = 0


@dataclass(frozen=True)
class TouchEvent:
    """
    Touch event with the list of currently active contacts.
    Only the first contact is ever used for drawing.
    """
    kind: InputKind
    touches: Tuple[TouchPoint, ...] = field(default_factory=tuple)


InputEvent = Union[PointerEvent, TouchEvent]
