# signature_pad/logic/coordinate_mapper.py
from __future__ import annotations
from typing import Optional

from ..models.input_events import InputEvent, TouchEvent
from ..models.surface_geometry import Point, SurfaceRect


def map_event(event: InputEvent, rect: SurfaceRect) -> Optional[Point]:
    """
    Convert a raw viewport coordinate into surface-local logical coordinates.

    For touch input only the first active contact is used. Points outside the
    surface are returned unclamped. Returns None for a touch event that has no
    contacts left (e.g. the final touchend).
    """
    if isinstance(event, TouchEvent):
        if not event.touches:
            return None
        first = event.touches[0]
        raw_x, raw_y = first.x, first.y
    else:
        raw_x, raw_y = event.x, event.y
    return Point(x=raw_x - rect.left, y=raw_y - rect.top)
