from __future__ import annotations

import unittest

from contracts.detection import BBox, Detection
from interpretation.normalize import normalize_detections


def _det(text: str, confidence: float = 90.0) -> Detection:
    return Detection(text=text, confidence=confidence, bbox=BBox(0, 0, 10, 10))


class TestNormalizeDetections(unittest.TestCase):
    def test_strips_zero_width_and_collapses_whitespace(self) -> None:
        out = normalize_detections([_det("\u200bBlinding\ufeff   Lights \u200d")])
        self.assertEqual([d.text for d in out], ["Blinding Lights"])

    def test_drops_empty_text_and_preserves_order(self) -> None:
        out = normalize_detections([_det("b"), _det("   "), _det("\u200b\u200c"), _det("a")])
        self.assertEqual([d.text for d in out], ["b", "a"])

    def test_single_spaces_inside_text_are_kept(self) -> None:
        out = normalize_detections([_det("The Weeknd")])
        self.assertEqual(out[0].text, "The Weeknd")

    def test_non_finite_values_are_zeroed(self) -> None:
        raw = Detection(
            text="Hello",
            confidence=float("nan"),
            bbox=BBox(float("inf"), 5, float("nan"), 12),
        )
        (out,) = normalize_detections([raw])
        self.assertEqual(out.confidence, 0.0)
        self.assertEqual(out.bbox, BBox(0.0, 5.0, 0.0, 12.0))

    def test_empty_input(self) -> None:
        self.assertEqual(normalize_detections([]), [])


if __name__ == "__main__":
    unittest.main()
