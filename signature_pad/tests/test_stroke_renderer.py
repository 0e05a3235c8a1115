"""
signature_pad/tests/test_stroke_renderer.py

Pen-down / move / pen-up handling and the drawing gate.
"""

from __future__ import annotations

import unittest

from signature_pad.logic.drawing_surface import DrawingSurface
from signature_pad.logic.stroke_renderer import StrokeRenderer
from signature_pad.models.pen_style import PenStyle
from signature_pad.models.surface_geometry import Point


class TestStrokeRenderer(unittest.TestCase):
    def setUp(self) -> None:
        self.allowed = True
        self.surface = DrawingSurface(100, 100)
        self.renderer = StrokeRenderer(self.surface, style=PenStyle(), can_draw=lambda: self.allowed)

    def test_segments_are_painted_immediately(self) -> None:
        self.assertTrue(self.renderer.pen_down(Point(10, 10)))
        self.assertTrue(self.renderer.is_drawing)
        self.assertTrue(self.surface.is_blank())   # pen-down alone lays no ink

        self.assertTrue(self.renderer.move_to(Point(50, 10)))
        self.assertFalse(self.surface.is_blank())
        self.assertEqual(self.renderer.cursor, Point(50, 10))

        self.renderer.move_to(Point(50, 60))
        self.assertEqual(self.surface.image.getpixel((50, 40)), (0, 0, 0, 255))

    def test_pen_up_closes_path(self) -> None:
        self.renderer.pen_down(Point(10, 10))
        self.assertTrue(self.renderer.pen_up())
        self.assertFalse(self.renderer.is_drawing)
        self.assertIsNone(self.renderer.cursor)
        self.assertFalse(self.renderer.move_to(Point(90, 90)))
        self.assertTrue(self.surface.is_blank())
        self.assertFalse(self.renderer.pen_up())

    def test_gate_refuses_pen_down(self) -> None:
        self.allowed = False
        self.assertFalse(self.renderer.pen_down(Point(10, 10)))
        self.assertFalse(self.renderer.is_drawing)
        self.allowed = True
        self.assertFalse(self.renderer.move_to(Point(80, 80)))
        self.assertTrue(self.surface.is_blank())

    def test_gate_closing_mid_stroke_stops_ink(self) -> None:
        self.renderer.pen_down(Point(10, 10))
        self.allowed = False
        self.assertFalse(self.renderer.move_to(Point(90, 10)))
        self.assertTrue(self.surface.is_blank())
        # pen-up still closes the path
        self.assertTrue(self.renderer.pen_up())

    def test_pen_width_is_fixed(self) -> None:
        renderer = StrokeRenderer(self.surface, style=PenStyle(width=6), can_draw=lambda: True)
        renderer.pen_down(Point(10, 50))
        renderer.move_to(Point(90, 50))
        bbox = self.surface.image.getchannel("A").getbbox()
        # round caps extend half the width past each end point
        self.assertLessEqual(bbox[0], 8)
        self.assertGreaterEqual(bbox[2], 92)
        self.assertGreaterEqual(bbox[3] - bbox[1], 5)


if __name__ == "__main__":
    unittest.main()
