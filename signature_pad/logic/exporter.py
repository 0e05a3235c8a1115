# signature_pad/logic/exporter.py
from __future__ import annotations

import io
from typing import Union

from PIL import Image

from ..models.errors import UnsupportedFormatError
from ..models.signature_enums import ImageFormat

_ALIASES = {"jpg": ImageFormat.JPEG}
_PIL_FORMATS = {
    ImageFormat.PNG: "PNG",
    ImageFormat.JPEG: "JPEG",
    ImageFormat.WEBP: "WEBP",
    ImageFormat.BMP: "BMP",
}
# Opaque formats get the same white backdrop the pad shows on screen.
_BACKDROP = (255, 255, 255, 255)


def parse_format(fmt: Union[str, ImageFormat, None]) -> ImageFormat:
    """
    Resolve a format name ("png", "JPG", "image/webp", ImageFormat.BMP, ...).
    Raises UnsupportedFormatError instead of falling back to a default.
    """
    if isinstance(fmt, ImageFormat):
        return fmt
    if not isinstance(fmt, str):
        raise UnsupportedFormatError(fmt)
    key = fmt.strip().lower()
    if key.startswith("image/"):
        key = key[len("image/"):]
    key = key.lstrip(".")
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return ImageFormat(key)
    except ValueError:
        raise UnsupportedFormatError(fmt) from None


def encode_image(image: Image.Image, fmt: Union[str, ImageFormat] = ImageFormat.PNG,
                 *, jpeg_quality: int = 95) -> bytes:
    """
    Encode an RGBA pixel buffer. PNG (the default) and WEBP are lossless and
    keep transparency; JPEG and BMP are flattened onto white.
    """
    target = parse_format(fmt)
    src = image if image.mode == "RGBA" else image.convert("RGBA")

    if target.has_alpha:
        out = src
    else:
        backdrop = Image.new("RGBA", src.size, _BACKDROP)
        backdrop.alpha_composite(src)
        out = backdrop.convert("RGB")

    params: dict = {}
    if target is ImageFormat.JPEG:
        params["quality"] = max(1, min(100, int(jpeg_quality)))
    elif target is ImageFormat.WEBP:
        params["lossless"] = True

    buf = io.BytesIO()
    out.save(buf, format=_PIL_FORMATS[target], **params)
    return buf.getvalue()
