"""
core/tests/test_config_service.py

Layer precedence and typed sections of ConfigService.
Uses unittest to avoid external test dependencies.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from core.config.config_service import ConfigService
from signature_pad.logic.signature_pad_engine import PadSettings


class TestConfigService(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.defaults_ini = self.tmp / "defaults.ini"
        self.machine_ini = self.tmp / "config.ini"
        self.user_ini = self.tmp / "user.ini"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _service(self, environ: dict[str, str] | None = None) -> ConfigService:
        return ConfigService(defaults_ini=self.defaults_ini, machine_ini=self.machine_ini,
                             user_ini=self.user_ini, environ=environ or {})

    def test_embedded_defaults(self) -> None:
        cfg = self._service()
        self.assertEqual(cfg.pen.width, 2.0)
        self.assertEqual(cfg.pen.color, "#000000")
        self.assertEqual((cfg.surface.width, cfg.surface.height), (600, 300))
        self.assertEqual(cfg.surface.device_pixel_ratio, 1.0)
        self.assertTrue(cfg.surface.detect_device_pixel_ratio)
        self.assertFalse(cfg.surface.block_input_while_redrawing)
        self.assertEqual(cfg.export.default_format, "png")
        self.assertFalse(cfg.logging.event_log_enabled)
        self.assertIsInstance(cfg.logging.event_log_db, Path)

    def test_env_overrides_defaults_ini(self) -> None:
        self.defaults_ini.write_text("[Pen]\nwidth = 3\n", encoding="utf-8")
        cfg = self._service({"SIGPAD_PEN__WIDTH": "4", "SIGPAD_SURFACE__BLOCK_INPUT_WHILE_REDRAWING": "yes",
                             "UNRELATED": "1", "SIGPAD_BROKEN": "x"})
        self.assertEqual(cfg.pen.width, 4.0)
        self.assertTrue(cfg.surface.block_input_while_redrawing)

    def test_machine_and_user_layers_win(self) -> None:
        self.machine_ini.write_text("[Export]\ndefault_format = jpeg\njpeg_quality = 80\n", encoding="utf-8")
        self.user_ini.write_text("[Export]\njpeg_quality = 70\n", encoding="utf-8")
        cfg = self._service({"SIGPAD_EXPORT__DEFAULT_FORMAT": "webp"})
        self.assertEqual(cfg.export.default_format, "jpeg")
        self.assertEqual(cfg.export.jpeg_quality, 70)

    def test_reload_picks_up_new_layer(self) -> None:
        cfg = self._service()
        self.assertEqual(cfg.surface.width, 600)
        self.machine_ini.write_text("[Surface]\nwidth = 800\n", encoding="utf-8")
        cfg.reload()
        self.assertEqual(cfg.surface.width, 800)

    def test_pad_settings_follow_surface_section(self) -> None:
        cfg = self._service({"SIGPAD_SURFACE__DETECT_DEVICE_PIXEL_RATIO": "false",
                             "SIGPAD_SURFACE__DEVICE_PIXEL_RATIO": "2"})
        settings = PadSettings.from_config(cfg)
        self.assertFalse(settings.detect_device_pixel_ratio)
        self.assertEqual(settings.device_pixel_ratio, 2.0)
        self.assertEqual((settings.width, settings.height), (600, 300))


if __name__ == "__main__":
    unittest.main()
