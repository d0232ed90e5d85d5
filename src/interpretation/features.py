from __future__ import annotations

from contracts.interpretation import CapitalizationPattern, FeatureLine, LineFeatures, LogicalLine

from .text import count_digits, count_letters, letters_only

ALIGNMENT_BUCKET = 16


def capitalization_pattern(text: str) -> CapitalizationPattern:
    letters = letters_only(text)
    if not letters:
        return CapitalizationPattern.MIXED
    if letters == letters.lower():
        return CapitalizationPattern.LOWER
    if letters == letters.upper():
        return CapitalizationPattern.UPPER

    for word in letters.split():
        first, rest = word[:1], word[1:]
        if first != first.upper() or rest != rest.lower():
            return CapitalizationPattern.MIXED
    return CapitalizationPattern.TITLE


def percentile_rank(values: list[float], value: float) -> float:
    """Fraction of `values` that are <= `value` (self-inclusive when value is a member)."""
    if not values:
        return 0.0
    return sum(1 for v in values if v <= value) / len(values)


def _alignment_key(x: float) -> int:
    # Half-up rounding; geometry is non-negative so floor(v + 0.5) is exact.
    return int(x / ALIGNMENT_BUCKET + 0.5)


def extract_features(lines: list[LogicalLine]) -> list[FeatureLine]:
    heights = [line.bbox.height for line in lines]
    widths = [line.bbox.width for line in lines]
    tops = [line.bbox.y for line in lines]

    # Cluster ids are handed out in first-seen order.
    clusters: dict[int, int] = {}

    out: list[FeatureLine] = []
    for line in lines:
        length = len(line.text)
        words = line.text.split()
        avg_word_length = sum(len(w) for w in words) / len(words) if words else 0.0
        cluster = clusters.setdefault(_alignment_key(line.bbox.x), len(clusters))

        out.append(
            FeatureLine(
                text=line.text,
                avg_confidence=line.avg_confidence,
                bbox=line.bbox,
                width_ratio=line.width_ratio,
                height_ratio=line.height_ratio,
                features=LineFeatures(
                    length=length,
                    letter_ratio=count_letters(line.text) / length if length else 0.0,
                    digit_ratio=count_digits(line.text) / length if length else 0.0,
                    word_count=len(words),
                    avg_word_length=avg_word_length,
                    capitalization_pattern=capitalization_pattern(line.text),
                    height_percentile=percentile_rank(heights, line.bbox.height),
                    width_percentile=percentile_rank(widths, line.bbox.width),
                    vertical_position_percentile=percentile_rank(tops, line.bbox.y),
                    alignment_cluster=cluster,
                ),
            )
        )
    return out
