from __future__ import annotations

from contracts.interpretation import FeatureLine, ScreenType

# Music layout: two tallest lines stacked, left-aligned and letter-heavy.
_MUSIC_FIRST_HEIGHT_PCT = 0.75
_MUSIC_SECOND_HEIGHT_PCT = 0.5
_MUSIC_MIN_LETTER_RATIO = 0.6
_MUSIC_MIN_X_TOLERANCE = 24.0
_MUSIC_X_TOLERANCE_K = 0.2
_SIMILARLY_TALL_K = 0.85
_MAX_SIMILARLY_TALL = 3

# Notes layout: many uniform-height, sentence-like lines.
_NOTES_MIN_LINES = 5
_NOTES_HEIGHT_TOLERANCE_K = 0.25
_NOTES_MIN_UNIFORM_SHARE = 0.6
_NOTES_PARAGRAPH_WORDS = 5
_NOTES_MIN_PARAGRAPH_LINES = 3


def _looks_like_music(lines: list[FeatureLine]) -> bool:
    by_height = sorted(lines, key=lambda l: l.bbox.height, reverse=True)
    first, second = by_height[0], by_height[1]

    # Dense all-caps menus are tall and aligned too; cap how many lines rival the tallest.
    similarly_tall = sum(1 for l in lines if l.bbox.height >= first.bbox.height * _SIMILARLY_TALL_K)
    x_tolerance = max(_MUSIC_MIN_X_TOLERANCE, first.bbox.width * _MUSIC_X_TOLERANCE_K)

    return (
        first.features.height_percentile >= _MUSIC_FIRST_HEIGHT_PCT
        and second.features.height_percentile >= _MUSIC_SECOND_HEIGHT_PCT
        and first.features.letter_ratio >= _MUSIC_MIN_LETTER_RATIO
        and second.features.letter_ratio >= _MUSIC_MIN_LETTER_RATIO
        and abs(first.bbox.x - second.bbox.x) <= x_tolerance
        and second.bbox.y > first.bbox.y
        and similarly_tall <= _MAX_SIMILARLY_TALL
    )


def _looks_like_notes(lines: list[FeatureLine]) -> bool:
    if len(lines) < _NOTES_MIN_LINES:
        return False
    mean_height = sum(l.bbox.height for l in lines) / len(lines)
    uniform = sum(1 for l in lines if abs(l.bbox.height - mean_height) <= mean_height * _NOTES_HEIGHT_TOLERANCE_K)
    paragraph_like = sum(1 for l in lines if l.features.word_count >= _NOTES_PARAGRAPH_WORDS)
    return uniform / len(lines) >= _NOTES_MIN_UNIFORM_SHARE and paragraph_like >= _NOTES_MIN_PARAGRAPH_LINES


def classify_screen(lines: list[FeatureLine]) -> ScreenType:
    """
    Label the overall layout from geometry and text statistics only.

    Decision order: music, then notes, else general. Fewer than two lines is always general.
    """

    if len(lines) < 2:
        return ScreenType.GENERAL
    if _looks_like_music(lines):
        return ScreenType.MUSIC
    if _looks_like_notes(lines):
        return ScreenType.NOTES
    return ScreenType.GENERAL
