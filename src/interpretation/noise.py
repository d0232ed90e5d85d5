from __future__ import annotations

from contracts.interpretation import LogicalLine

from .text import CLOCK_ONLY, DIGITS_OR_PUNCTUATION_ONLY

MIN_LINE_LENGTH = 2
MAX_LINE_LENGTH = 120
MIN_LINE_CONFIDENCE = 40.0


def noise_reason(line: LogicalLine) -> str | None:
    """Return why a line is noise, or None when it carries content."""

    trimmed = line.text.strip()
    if len(trimmed) < MIN_LINE_LENGTH:
        return "too_short"
    if len(trimmed) > MAX_LINE_LENGTH:
        return "too_long"
    if line.avg_confidence < MIN_LINE_CONFIDENCE:
        return f"confidence_below_floor:{MIN_LINE_CONFIDENCE:g}"
    if DIGITS_OR_PUNCTUATION_ONLY.match(trimmed):
        return "digits_or_punctuation_only"
    if CLOCK_ONLY.match(trimmed):
        return "clock"
    return None


def is_noise(line: LogicalLine) -> bool:
    return noise_reason(line) is not None


def filter_noise(lines: list[LogicalLine]) -> list[LogicalLine]:
    return [line for line in lines if not is_noise(line)]
