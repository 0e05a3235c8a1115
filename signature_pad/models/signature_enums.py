# signature_pad/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class Role(str, Enum):
    """Who is currently operating the pad."""
    INITIATOR = "initiator"
    SIGNER = "signer"

    def other(self) -> "Role":
        return Role.SIGNER if self is Role.INITIATOR else Role.INITIATOR


class SignatureStatus(str, Enum):
    """Lifecycle of the signature image held by the pad."""
    NOT_SIGNED = "not_signed"
    REQUESTED = "requested"
    SIGNED = "signed"


class PadAction(str, Enum):
    """Commands exposed to the UI-control layer."""
    REQUEST_SIGNATURE = "request_signature"
    COMPLETE_SIGNATURE = "complete_signature"
    CLEAR = "clear"
    TOGGLE_ROLE = "toggle_role"
    EXPORT = "export"


class InputKind(str, Enum):
    """Pointer/touch phases the stroke renderer reacts to."""
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


class ImageFormat(str, Enum):
    """Raster encodings offered by the export function."""
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    BMP = "bmp"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def has_alpha(self) -> bool:
        return self in (ImageFormat.PNG, ImageFormat.WEBP)
