from __future__ import annotations

import unittest

from contracts.detection import BBox
from contracts.interpretation import CapitalizationPattern, LogicalLine
from interpretation.features import capitalization_pattern, extract_features, percentile_rank


def _line(text: str, x: float = 0, y: float = 0, w: float = 100, h: float = 20) -> LogicalLine:
    return LogicalLine(text=text, avg_confidence=90.0, bbox=BBox(x, y, w, h), width_ratio=0.0, height_ratio=0.0)


class TestCapitalizationPattern(unittest.TestCase):
    def test_patterns(self) -> None:
        cases = {
            "hello world": CapitalizationPattern.LOWER,
            "HELLO WORLD": CapitalizationPattern.UPPER,
            "YOASOBI": CapitalizationPattern.UPPER,
            "Blinding Lights": CapitalizationPattern.TITLE,
            "The Weeknd & Daft Punk": CapitalizationPattern.TITLE,
            "Shopping list": CapitalizationPattern.MIXED,
            "iPhone": CapitalizationPattern.MIXED,
            "Wi-Fi": CapitalizationPattern.MIXED,
        }
        for text, expected in cases.items():
            self.assertIs(capitalization_pattern(text), expected, text)

    def test_no_letters_is_mixed(self) -> None:
        self.assertIs(capitalization_pattern("1234 !!"), CapitalizationPattern.MIXED)

    def test_caseless_script_reads_as_lower(self) -> None:
        self.assertIs(capitalization_pattern("夜に駆ける"), CapitalizationPattern.LOWER)


class TestPercentileRank(unittest.TestCase):
    def test_inclusive_rank(self) -> None:
        values = [10.0, 20.0, 20.0, 30.0]
        self.assertEqual(percentile_rank(values, 20.0), 0.75)
        self.assertEqual(percentile_rank(values, 10.0), 0.25)
        self.assertEqual(percentile_rank(values, 30.0), 1.0)

    def test_empty(self) -> None:
        self.assertEqual(percentile_rank([], 5.0), 0.0)


class TestExtractFeatures(unittest.TestCase):
    def test_text_statistics(self) -> None:
        (line,) = extract_features([_line("Track 12")])
        f = line.features
        self.assertEqual(f.length, 8)
        self.assertAlmostEqual(f.letter_ratio, 5 / 8)
        self.assertAlmostEqual(f.digit_ratio, 2 / 8)
        self.assertEqual(f.word_count, 2)
        self.assertAlmostEqual(f.avg_word_length, 3.5)
        self.assertIs(f.capitalization_pattern, CapitalizationPattern.TITLE)

    def test_percentiles_are_computed_against_the_whole_set(self) -> None:
        lines = extract_features(
            [
                _line("Big Title", y=10, w=300, h=50),
                _line("Artist Name", y=70, w=200, h=40),
                _line("small print", y=200, w=100, h=10),
            ]
        )
        self.assertEqual([l.features.height_percentile for l in lines], [1.0, 2 / 3, 1 / 3])
        self.assertEqual([l.features.width_percentile for l in lines], [1.0, 2 / 3, 1 / 3])
        self.assertEqual([l.features.vertical_position_percentile for l in lines], [1 / 3, 2 / 3, 1.0])
        for l in lines:
            for pct in (
                l.features.height_percentile,
                l.features.width_percentile,
                l.features.vertical_position_percentile,
            ):
                self.assertGreater(pct, 0.0)
                self.assertLessEqual(pct, 1.0)

    def test_alignment_clusters_in_first_seen_order(self) -> None:
        xs = [0, 7, 8, 40, 15, 300]
        lines = extract_features([_line(f"line {i}", x=x, y=i * 30) for i, x in enumerate(xs)])
        # round(x / 16): 0, 0, 1 (half rounds up), 3, 1, 19
        self.assertEqual([l.features.alignment_cluster for l in lines], [0, 0, 1, 2, 1, 3])

    def test_geometry_and_text_are_carried_over(self) -> None:
        src = _line("Hello there", x=5, y=6, w=70, h=8)
        (line,) = extract_features([src])
        self.assertEqual(line.text, src.text)
        self.assertEqual(line.bbox, src.bbox)
        self.assertEqual(line.avg_confidence, src.avg_confidence)

    def test_empty(self) -> None:
        self.assertEqual(extract_features([]), [])


if __name__ == "__main__":
    unittest.main()
