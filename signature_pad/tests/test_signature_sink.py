"""
signature_pad/tests/test_signature_sink.py

File-name suggestion, data URLs, saving exports to disk and the status
presentation helpers.
"""

from __future__ import annotations

import base64
import tempfile
import unittest
from pathlib import Path

from signature_pad.logic.signature_pad_engine import PadSettings, SignaturePadEngine
from signature_pad.logic.signature_sink import save_signature, suggest_file_name, to_data_url
from signature_pad.logic.status_presenter import role_label, status_color, status_text
from signature_pad.models.errors import UnsupportedFormatError
from signature_pad.models.signature_enums import ImageFormat, Role, SignatureStatus
from signature_pad.models.surface_geometry import Point


class TestSignatureSink(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = SignaturePadEngine(PadSettings(width=60, height=30))
        self.engine.request_signature()
        self.engine.pen_down(Point(5, 15))
        self.engine.pen_move(Point(55, 15))
        self.engine.pen_up()

    def test_suggest_file_name(self) -> None:
        self.assertEqual(suggest_file_name(), "signature.png")
        self.assertEqual(suggest_file_name("jpeg"), "signature.jpg")
        self.assertEqual(suggest_file_name(ImageFormat.WEBP, "contract_42"), "contract_42.webp")
        with self.assertRaises(UnsupportedFormatError):
            suggest_file_name("pdf")

    def test_data_url_round_trips_payload(self) -> None:
        data = self.engine.export("png")
        url = to_data_url(data, "png")
        self.assertTrue(url.startswith("data:image/png;base64,"))
        self.assertEqual(base64.b64decode(url.split(",", 1)[1]), data)

    def test_save_into_directory_uses_default_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = save_signature(self.engine, tmp)
            self.assertEqual(path, Path(tmp) / "signature.png")
            self.assertEqual(path.read_bytes(), self.engine.export("png"))

    def test_save_to_explicit_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out" / "client.jpg"
            path = save_signature(self.engine, target, "jpg")
            self.assertEqual(path, target)
            self.assertTrue(path.read_bytes().startswith(b"\xff\xd8"))


class TestStatusPresenter(unittest.TestCase):
    def test_status_text_and_colour(self) -> None:
        self.assertEqual(status_text(SignatureStatus.NOT_SIGNED), "Not signed")
        self.assertEqual(status_text(SignatureStatus.REQUESTED), "Waiting for signature")
        self.assertEqual(status_text("signed"), "Signed")
        self.assertEqual(status_color(SignatureStatus.SIGNED), "#4caf50")
        self.assertEqual(status_color(SignatureStatus.REQUESTED), "#ff9800")
        self.assertEqual(status_color(SignatureStatus.NOT_SIGNED), "#9e9e9e")

    def test_role_label(self) -> None:
        self.assertEqual(role_label(Role.INITIATOR), "Admin")
        self.assertEqual(role_label(Role.SIGNER), "Client")


if __name__ == "__main__":
    unittest.main()
