# signature_pad/logic/signature_sink.py
"""
Output sinks for exported signatures (file download, data URL).

These sit outside the engine: the engine produces bytes, the sink decides
where they go.
"""
from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from ..models.signature_enums import ImageFormat
from .exporter import parse_format

if TYPE_CHECKING:
    from .signature_pad_engine import SignaturePadEngine

logger = logging.getLogger(__name__)


def suggest_file_name(fmt: Union[str, ImageFormat] = ImageFormat.PNG, stem: str = "signature") -> str:
    """signature.png, signature.jpg, ..."""
    return f"{stem or 'signature'}.{parse_format(fmt).extension}"


def to_data_url(data: bytes, fmt: Union[str, ImageFormat] = ImageFormat.PNG) -> str:
    mime = parse_format(fmt).mime_type
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def save_signature(engine: "SignaturePadEngine", target: Union[str, Path],
                   fmt: Union[str, ImageFormat, None] = None, *, stem: Optional[str] = None) -> Path:
    """
    Export the engine's surface and write it to ``target``.

    ``target`` may be a directory (the file is named via suggest_file_name)
    or a full file path.
    """
    image_format = parse_format(fmt if fmt is not None else engine.settings.default_format)
    data = engine.export(image_format)

    path = Path(target)
    if path.is_dir():
        path = path / suggest_file_name(image_format, stem or engine.settings.file_stem)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Signature saved to %s (%s, %d bytes)", path, image_format.value, len(data))
    return path
