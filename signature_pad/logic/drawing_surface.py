# signature_pad/logic/drawing_surface.py
"""
Drawing surface and surface scaler.

The surface owns an RGBA pixel buffer whose backing resolution is the
logical (displayed) size times the device pixel ratio. Callers draw in
logical coordinates through :class:`ScaledContext`; the scale is applied
here and nowhere else.

Resizing keeps the ink: the old buffer is captured as PNG, a fresh buffer
is allocated, and a redraw of the capture is queued. Redraws run later via
:meth:`DrawingSurface.run_pending_redraws` (the Tk front end schedules that
with ``after_idle``). Every resize and every clear bumps the surface
generation; a queued redraw from an older generation is discarded. A redraw
still queued when the next resize arrives is applied before the capture and
leaves the queue.
"""
from __future__ import annotations

import io
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Literal, Optional, Tuple

from PIL import Image, ImageDraw

from ..models.errors import InvalidSurfaceSizeError
from ..models.pen_style import PenStyle
from ..models.surface_geometry import Point

logger = logging.getLogger(__name__)

BLANK = (0, 0, 0, 0)


def _normalize_ratio(device_pixel_ratio: Optional[float]) -> float:
    try:
        ratio = float(device_pixel_ratio) if device_pixel_ratio is not None else 1.0
    except (TypeError, ValueError):
        return 1.0
    return ratio if ratio > 0 else 1.0


def ratio_from_dpi(pixels_per_inch: Optional[float], reference_dpi: float = 96.0) -> float:
    """Device pixel ratio of a display reporting ``pixels_per_inch``."""
    try:
        ratio = float(pixels_per_inch) / reference_dpi
    except (TypeError, ValueError, ZeroDivisionError):
        return 1.0
    return round(ratio, 2) if ratio > 0 else 1.0


@dataclass(frozen=True)
class PendingRedraw:
    """Captured content of a surface before a resize, waiting to be replayed."""
    generation: int
    png_bytes: Optional[bytes]   # None when the captured surface was blank


@dataclass(frozen=True)
class RedrawOutcome:
    generation: int
    result: Literal["applied", "empty", "stale"]


class ScaledContext:
    """
    Drawing context in logical coordinates over a scaled buffer.
    One drawing unit equals one logical pixel.
    """

    def __init__(self, image: Image.Image, scale: float) -> None:
        self._draw = ImageDraw.Draw(image)
        self._scale = scale

    def _px(self, p: Point) -> Tuple[float, float]:
        return (p.x * self._scale, p.y * self._scale)

    def segment(self, start: Point, end: Point, style: PenStyle) -> None:
        """Paint one round-capped line segment."""
        width = style.width * self._scale
        a, b = self._px(start), self._px(end)
        self._draw.line([a, b], fill=style.color, width=max(1, int(round(width))))
        r = width / 2.0
        if r >= 1.0:
            for cx, cy in (a, b):
                self._draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=style.color)


class DrawingSurface:
    """Pixel buffer plus the logical-size / backing-resolution mapping."""

    def __init__(self, width: float, height: float, device_pixel_ratio: Optional[float] = None) -> None:
        self._generation = 0
        self._pending: Deque[PendingRedraw] = deque()
        self._configure(width, height, device_pixel_ratio)

    # ------------------------------------------------------------------ props
    @property
    def logical_size(self) -> Tuple[float, float]:
        return (self._logical_w, self._logical_h)

    @property
    def backing_size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def image(self) -> Image.Image:
        """The live backing buffer. Mutate only through this class."""
        return self._image

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_pending_redraw(self) -> bool:
        return any(p.generation == self._generation for p in self._pending)

    # ------------------------------------------------------------------ scaler
    def _configure(self, width: float, height: float, device_pixel_ratio: Optional[float]) -> None:
        if width is None or height is None or width <= 0 or height <= 0:
            raise InvalidSurfaceSizeError(width, height)
        scale = _normalize_ratio(device_pixel_ratio)
        backing = (max(1, int(round(width * scale))), max(1, int(round(height * scale))))
        self._logical_w = float(width)
        self._logical_h = float(height)
        self._scale = scale
        self._image = Image.new("RGBA", backing, BLANK)

    def resize(self, width: float, height: float, device_pixel_ratio: Optional[float] = None) -> int:
        """
        Re-derive the backing resolution for a new displayed size and queue a
        redraw of the previous content. Returns the new generation.
        """
        if width is None or height is None or width <= 0 or height <= 0:
            raise InvalidSurfaceSizeError(width, height)

        # A redraw still waiting from the previous resize is folded in now,
        # otherwise its ink would be missing from the capture below.
        current = self._latest_pending()
        if current is not None:
            self._apply(current)
            self._pending = deque(p for p in self._pending if p is not current)

        captured = None if self.is_blank() else self.encode_png()
        self._configure(width, height, device_pixel_ratio)
        self._generation += 1
        self._pending.append(PendingRedraw(generation=self._generation, png_bytes=captured))
        logger.debug(
            "Surface resized to %sx%s @%s (backing %sx%s), generation %s",
            width, height, self._scale, *self._image.size, self._generation,
        )
        return self._generation

    def run_pending_redraws(self) -> List[RedrawOutcome]:
        """Complete every queued redraw; stale ones are dropped."""
        outcomes: List[RedrawOutcome] = []
        while self._pending:
            pending = self._pending.popleft()
            if pending.generation != self._generation:
                logger.debug("Discarding stale redraw of generation %s (current %s)",
                             pending.generation, self._generation)
                outcomes.append(RedrawOutcome(pending.generation, "stale"))
                continue
            applied = self._apply(pending)
            outcomes.append(RedrawOutcome(pending.generation, "applied" if applied else "empty"))
        return outcomes

    def _latest_pending(self) -> Optional[PendingRedraw]:
        for pending in reversed(self._pending):
            if pending.generation == self._generation:
                return pending
        return None

    def _apply(self, pending: PendingRedraw) -> bool:
        if not pending.png_bytes:
            return False
        with Image.open(io.BytesIO(pending.png_bytes)) as captured:
            restored = captured.convert("RGBA").resize(self._image.size, Image.Resampling.BILINEAR)
        # restored ink goes beneath anything drawn since the resize
        restored.alpha_composite(self._image)
        self._image = restored
        return True

    # ------------------------------------------------------------------ buffer
    def context(self) -> ScaledContext:
        return ScaledContext(self._image, self._scale)

    def clear(self) -> None:
        """Blank the buffer. Queued redraws become stale."""
        self._image = Image.new("RGBA", self._image.size, BLANK)
        self._generation += 1

    def is_blank(self) -> bool:
        return self._image.getchannel("A").getbbox() is None

    def encode_png(self) -> bytes:
        buf = io.BytesIO()
        self._image.save(buf, format="PNG")
        return buf.getvalue()

    def snapshot(self) -> Image.Image:
        return self._image.copy()
