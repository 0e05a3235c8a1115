from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from core.config.config_service import PenConfig


def _hex_to_rgba(hexstr: str) -> Tuple[int, int, int, int]:
    """
    Convert hex color (#RRGGBB or #RGB) into an opaque RGBA tuple for PIL.
    """
    s = (hexstr or "#000000").strip()
    if not s.startswith("#"):
        s = "#" + s
    if len(s) == 4:
        r = int(s[1] * 2, 16); g = int(s[2] * 2, 16); b = int(s[3] * 2, 16)
    else:
        r = int(s[1:3], 16); g = int(s[3:5], 16); b = int(s[5:7], 16)
    return (r, g, b, 255)


@dataclass(frozen=True)
class PenStyle:
    """
    Fixed ink style, set once when the renderer is built.
    Width is in logical pixels; caps are always round.
    """
    width: float = 2.0
    color: Tuple[int, int, int, int] = (0, 0, 0, 255)

    @classmethod
    def from_config(cls, cfg: PenConfig) -> "PenStyle":
        return cls(width=max(0.5, float(cfg.width)), color=_hex_to_rgba(cfg.color))
