# signature_pad/logic/signature_pad_engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from core.config.config_service import ConfigService

from ..models.input_events import InputEvent
from ..models.pad_events import PadEvent, PadEventType
from ..models.pad_state import PadState
from ..models.pen_style import PenStyle
from ..models.signature_enums import ImageFormat, InputKind, PadAction, Role, SignatureStatus
from ..models.surface_geometry import Point, SurfaceRect
from .coordinate_mapper import map_event
from .drawing_surface import DrawingSurface, RedrawOutcome
from .exporter import encode_image, parse_format
from .stroke_renderer import StrokeRenderer
from .workflow import INITIAL_STATE, Effect, Transition, transition

logger = logging.getLogger(__name__)

_FEATURE_ID = "signature_pad"

PadObserver = Callable[[PadEvent], None]


@dataclass(frozen=True)
class PadSettings:
    """Construction-time settings of one engine."""
    width: float = 600
    height: float = 300
    device_pixel_ratio: Optional[float] = 1.0
    detect_device_pixel_ratio: bool = False
    pen: PenStyle = field(default_factory=PenStyle)
    block_input_while_redrawing: bool = False
    default_format: ImageFormat = ImageFormat.PNG
    file_stem: str = "signature"
    jpeg_quality: int = 95

    @classmethod
    def from_config(cls, cfg: ConfigService) -> "PadSettings":
        return cls(
            width=cfg.surface.width,
            height=cfg.surface.height,
            device_pixel_ratio=cfg.surface.device_pixel_ratio,
            detect_device_pixel_ratio=cfg.surface.detect_device_pixel_ratio,
            pen=PenStyle.from_config(cfg.pen),
            block_input_while_redrawing=cfg.surface.block_input_while_redrawing,
            default_format=parse_format(cfg.export.default_format),
            file_stem=cfg.export.file_stem,
            jpeg_quality=cfg.export.jpeg_quality,
        )


@dataclass(frozen=True)
class DispatchResult:
    transition: Transition
    data: Optional[bytes] = None


class SignaturePadEngine:
    """
    One signature pad: drawing surface, workflow state and stroke renderer.

    Input events pass the permission gate, get mapped to surface coordinates
    and are rendered immediately. Commands run through the pure workflow
    transition; refused commands change nothing and are reported as
    ``permission_denied`` events (and to the event log, if attached).

    There is no shared instance; construct one per pad (and per test).
    """

    def __init__(self, settings: Optional[PadSettings] = None, *,
                 event_logger: Optional[Any] = None) -> None:
        self._settings = settings or PadSettings()
        self._event_logger = event_logger
        self._state: PadState = INITIAL_STATE
        self._observers: List[PadObserver] = []
        self._surface = DrawingSurface(
            self._settings.width, self._settings.height, self._settings.device_pixel_ratio
        )
        self._renderer = StrokeRenderer(self._surface, style=self._settings.pen, can_draw=self.can_draw)

    # -------- State ----------------------------------------------------------
    @property
    def settings(self) -> PadSettings:
        return self._settings

    @property
    def event_logger(self) -> Any:
        """The attached event log, or None."""
        return self._event_logger

    @property
    def state(self) -> PadState:
        return self._state

    @property
    def role(self) -> Role:
        return self._state.role

    @property
    def status(self) -> SignatureStatus:
        return self._state.status

    @property
    def input_active(self) -> bool:
        return self._state.input_active

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def is_drawing(self) -> bool:
        return self._renderer.is_drawing

    def can_draw(self) -> bool:
        if not self._state.can_draw():
            return False
        if self._settings.block_input_while_redrawing and self._surface.has_pending_redraw:
            return False
        return True

    # -------- Observers ------------------------------------------------------
    def subscribe(self, callback: PadObserver) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: PadObserver) -> None:
        try:
            self._observers.remove(callback)
        except ValueError:
            pass

    def _emit(self, type_: PadEventType, action: str, reason: Optional[str] = None) -> None:
        event = PadEvent(type=type_, action=action, state=self._state, reason=reason)
        for cb in list(self._observers):
            try:
                cb(event)
            except Exception:
                logger.exception("Pad observer %r failed on %s", cb, type_)

    def _audit(self, event: str, message: Optional[str] = None, *, level: str = "INFO") -> None:
        if self._event_logger is None or not hasattr(self._event_logger, "log"):
            return
        try:
            self._event_logger.log(_FEATURE_ID, event, role=self._state.role.value,
                                   level=level, message=message)
        except Exception as ex:
            logger.warning("Event log write failed for %s: %s", event, ex)

    def _deny(self, action: str, reason: str) -> None:
        logger.info("Permission denied for %s (%s): %s", action, self._state.role.value, reason)
        self._audit("PermissionDenied", f"{action}: {reason}", level="WARNING")
        self._emit("permission_denied", action, reason)

    # -------- Input ----------------------------------------------------------
    def handle_input(self, event: InputEvent, rect: SurfaceRect) -> bool:
        """
        Feed one raw pointer/touch event. ``rect`` is the surface's current
        on-screen rectangle. Returns True if the event changed the pen state
        or laid down ink.
        """
        kind = InputKind(event.kind)
        if kind in (InputKind.UP, InputKind.LEAVE):
            return self.pen_up()
        point = map_event(event, rect)
        if point is None:
            return False
        if kind is InputKind.DOWN:
            return self.pen_down(point)
        return self.pen_move(point)

    def pen_down(self, point: Point) -> bool:
        if not self._renderer.pen_down(point):
            if not self._state.can_draw():
                self._deny("draw", "drawing requires the signer and an open request")
            else:
                self._deny("draw", "surface is restoring its content after a resize")
            return False
        return True

    def pen_move(self, point: Point) -> bool:
        if self._renderer.move_to(point):
            self._emit("surface_changed", "draw")
            return True
        return False

    def pen_up(self) -> bool:
        return self._renderer.pen_up()

    # -------- Resize ---------------------------------------------------------
    def resize(self, width: float, height: float, device_pixel_ratio: Optional[float] = None) -> int:
        """
        New displayed size. The previous ink is restored by the next
        run_pending_redraws(). Returns the surface generation.
        """
        ratio = self._settings.device_pixel_ratio if device_pixel_ratio is None else device_pixel_ratio
        generation = self._surface.resize(width, height, ratio)
        self._emit("surface_changed", "resize")
        return generation

    def run_pending_redraws(self) -> List[RedrawOutcome]:
        outcomes = self._surface.run_pending_redraws()
        for outcome in outcomes:
            if outcome.result == "stale":
                self._audit("ResizeRaceStale", f"generation {outcome.generation}", level="DEBUG")
                self._emit("resize_stale", "resize", f"generation {outcome.generation} superseded")
            elif outcome.result == "applied":
                self._emit("surface_changed", "resize")
        return outcomes

    # -------- Commands -------------------------------------------------------
    def dispatch(self, action: Union[PadAction, str], *,
                 fmt: Union[str, ImageFormat, None] = None) -> DispatchResult:
        """Run one command; EXPORT also returns the encoded bytes."""
        action = PadAction(action)
        if action is PadAction.EXPORT:
            data = self.export(fmt)
            return DispatchResult(Transition(self._state, effects=(Effect.EXPORT_IMAGE,)), data)

        result = transition(self._state, action)
        if result.denied:
            self._deny(action.value, result.denied_reason)
            return DispatchResult(result)

        before = self._state
        self._state = result.state
        for effect in result.effects:
            if effect is Effect.CLEAR_SURFACE:
                self._surface.clear()
        logger.debug("%s: %s -> %s", action.value, before, self._state)
        self._audit(action.value, f"{before.status.value} -> {self._state.status.value}")
        self._emit("state_changed", action.value)
        return DispatchResult(result)

    def request_signature(self) -> PadState:
        return self.dispatch(PadAction.REQUEST_SIGNATURE).transition.state

    def complete_signature(self) -> PadState:
        return self.dispatch(PadAction.COMPLETE_SIGNATURE).transition.state

    def clear(self) -> PadState:
        return self.dispatch(PadAction.CLEAR).transition.state

    def toggle_role(self) -> PadState:
        return self.dispatch(PadAction.TOGGLE_ROLE).transition.state

    def export(self, fmt: Union[str, ImageFormat, None] = None) -> bytes:
        """
        Encode the current backing buffer, whatever the signature status.
        Raises UnsupportedFormatError for unknown formats.
        """
        image_format = parse_format(self._settings.default_format if fmt is None else fmt)
        data = encode_image(self._surface.image, image_format, jpeg_quality=self._settings.jpeg_quality)
        self._audit("export", f"{image_format.value}, {len(data)} bytes, status {self._state.status.value}")
        self._emit("exported", PadAction.EXPORT.value)
        return data
