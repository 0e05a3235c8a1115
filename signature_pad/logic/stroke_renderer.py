# signature_pad/logic/stroke_renderer.py
from __future__ import annotations

from typing import Callable, Optional

from ..models.pen_style import PenStyle
from ..models.surface_geometry import Point
from .drawing_surface import DrawingSurface


class StrokeRenderer:
    """
    Turns pen-down / move / pen-up into ink on a DrawingSurface.

    Segments are painted as soon as they arrive, so a partial stroke is
    always visible. Only the open path's current position is kept; finished
    strokes live in the pixel buffer alone.

    ``can_draw`` is consulted on every pen-down and move. A pen-down while it
    returns False is ignored entirely.
    """

    def __init__(self, surface: DrawingSurface, *, style: PenStyle,
                 can_draw: Callable[[], bool]) -> None:
        self._surface = surface
        self._style = style
        self._can_draw = can_draw
        self._is_drawing = False
        self._cursor: Optional[Point] = None

    @property
    def style(self) -> PenStyle:
        return self._style

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    @property
    def cursor(self) -> Optional[Point]:
        return self._cursor

    # Canvas handlers
    def pen_down(self, point: Point) -> bool:
        """Begin a path at ``point``. Returns False when the gate refuses."""
        if not self._can_draw():
            return False
        self._is_drawing = True
        self._cursor = point
        return True

    def move_to(self, point: Point) -> bool:
        """Paint a segment to ``point``. Returns True if ink was laid down."""
        if not self._is_drawing or not self._can_draw():
            return False
        self._surface.context().segment(self._cursor, point, self._style)
        self._cursor = point
        return True

    def pen_up(self) -> bool:
        """Close the open path, if any."""
        if not self._is_drawing:
            return False
        self._is_drawing = False
        self._cursor = None
        return True
