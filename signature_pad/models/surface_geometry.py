from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Surface-local position in logical (pre-scale) pixels."""
    x: float
    y: float


@dataclass(frozen=True)
class SurfaceRect:
    """
    On-screen bounding rectangle of the drawing surface, in viewport pixels.
    Equivalent of a DOM bounding client rect / Tk root coordinates.
    """
    left: float
    top: float
    width: float
    height: float
