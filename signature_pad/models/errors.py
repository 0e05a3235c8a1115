# signature_pad/models/errors.py
from __future__ import annotations


class SignaturePadError(Exception):
    """Base class for errors the signature pad raises to its caller."""


class UnsupportedFormatError(SignaturePadError, ValueError):
    """Export was asked for an encoding the pad does not offer."""

    def __init__(self, fmt: object) -> None:
        super().__init__(f"Unsupported image format: {fmt!r}")
        self.format = fmt


class InvalidSurfaceSizeError(SignaturePadError, ValueError):
    """A surface dimension was zero or negative."""

    def __init__(self, width: float, height: float) -> None:
        super().__init__(f"Surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
