from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key

from contracts.interpretation import CapitalizationPattern, FeatureLine, MusicGuess, ScreenType

from .config import InterpretConfig
from .text import DASH_SEPARATOR, count_letters

logger = logging.getLogger(__name__)

ACCEPTANCE_THRESHOLD = 0.6

_TITLE_MIN_LENGTH = 3
_TITLE_MAX_LENGTH = 60
_TITLE_MAX_DIGIT_RATIO = 0.35
_ARTIST_MIN_LETTER_RATIO = 0.5

# Combined candidate weights sum to 0.7; the remainder is taken up by artist/context terms.
_VISUAL_WEIGHT = 0.4
_TEXT_WEIGHT = 0.3
_SPATIAL_WEIGHT = 0.3

_DASH_SCORE_K = 0.9
_DASH_BONUS = {ScreenType.MUSIC: 0.20, ScreenType.NOTES: 0.12, ScreenType.GENERAL: 0.12}

_TITLE_SHARE = 0.65
_ARTIST_SHARE = 0.35
_CONTEXT_BOOST = {ScreenType.MUSIC: 0.12, ScreenType.GENERAL: -0.18, ScreenType.NOTES: -0.24}

_SCORE_EPSILON = 0.001


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True, slots=True)
class ScoredTitle:
    index: int  # position in the feature line list
    line: FeatureLine
    visual_prominence: float
    text_quality: float
    score: float

    def to_debug_dict(self) -> dict[str, object]:
        return {
            "text": self.line.text,
            "score": round(self.score, 3),
            "visualProminence": round(self.visual_prominence, 3),
            "textQuality": round(self.text_quality, 3),
        }


@dataclass(frozen=True, slots=True)
class ScoredArtist:
    line: FeatureLine
    spatial_relationship: float
    score: float


def visual_prominence(line: FeatureLine) -> float:
    f = line.features
    return 0.55 * f.height_percentile + 0.30 * f.width_percentile + 0.15 * clamp01(line.avg_confidence / 100.0)


def text_quality(line: FeatureLine) -> float:
    f = line.features
    capitalization_bonus = 0.10 if f.capitalization_pattern is CapitalizationPattern.MIXED else 0.0
    return (
        0.55 * f.letter_ratio
        + 0.25 * (1.0 - f.digit_ratio)
        + 0.20 * clamp01(1.0 - abs(f.avg_word_length - 5.0) / 8.0)
        + capitalization_bonus
    )


def score_title_candidate(index: int, line: FeatureLine) -> ScoredTitle:
    vp = visual_prominence(line)
    tq = text_quality(line)
    return ScoredTitle(
        index=index,
        line=line,
        visual_prominence=vp,
        text_quality=clamp01(tq),
        score=clamp01(_VISUAL_WEIGHT * vp + _TEXT_WEIGHT * tq),
    )


def rank_title_candidates(lines: list[FeatureLine]) -> list[ScoredTitle]:
    scored = [
        score_title_candidate(i, line)
        for i, line in enumerate(lines)
        if _TITLE_MIN_LENGTH <= line.features.length <= _TITLE_MAX_LENGTH
        and line.features.digit_ratio <= _TITLE_MAX_DIGIT_RATIO
    ]
    # Stable: equal scores keep reading order.
    return sorted(scored, key=lambda c: c.score, reverse=True)


def spatial_relationship(title: FeatureLine, line: FeatureLine) -> float:
    """How well `line` sits where an artist credit under `title` is expected."""

    delta_y = line.bbox.y - title.bbox.bottom()
    expected_gap = max(6.0, title.bbox.height * 0.35)
    proximity = clamp01(1.0 - abs(delta_y - expected_gap) / (expected_gap * 2.0))
    x_align = clamp01(1.0 - abs(line.bbox.x - title.bbox.x) / max(20.0, title.bbox.width * 0.35))
    size_relation = clamp01(1.0 - abs(line.bbox.height / max(1.0, title.bbox.height) - 0.82))
    return 0.5 * proximity + 0.35 * x_align + 0.15 * size_relation


def score_artist_candidate(title: FeatureLine, line: FeatureLine) -> ScoredArtist | None:
    """Score `line` as the artist credit for `title`; lines at or above the title are rejected."""

    if line.bbox.y <= title.bbox.y:
        return None

    # Multi-artist credits ("A & B", "A, B") are rewarded.
    credit_bonus = 0.15 if ("&" in line.text or "," in line.text) else 0.0
    spatial = spatial_relationship(title, line)
    score = clamp01(
        _VISUAL_WEIGHT * visual_prominence(line)
        + _TEXT_WEIGHT * (text_quality(line) + credit_bonus)
        + _SPATIAL_WEIGHT * spatial
    )
    return ScoredArtist(line=line, spatial_relationship=spatial, score=score)


def _artist_order(a: ScoredArtist, b: ScoredArtist) -> int:
    # Score desc; near-ties go to the line closer to the top (nearest the title).
    if abs(b.score - a.score) > _SCORE_EPSILON:
        return -1 if a.score > b.score else 1
    if a.line.bbox.y != b.line.bbox.y:
        return -1 if a.line.bbox.y < b.line.bbox.y else 1
    return 0


def rank_artist_candidates(lines: list[FeatureLine], title: ScoredTitle) -> list[ScoredArtist]:
    scored: list[ScoredArtist] = []
    for i, line in enumerate(lines):
        if i == title.index or line.features.letter_ratio < _ARTIST_MIN_LETTER_RATIO:
            continue
        candidate = score_artist_candidate(title.line, line)
        if candidate is not None:
            scored.append(candidate)
    return sorted(scored, key=cmp_to_key(_artist_order))


def split_combined_title_artist(text: str) -> tuple[str, str] | None:
    """
    Split "Title - Artist" on a single-space-delimited dash.

    Only the first two pieces are used; both must contain at least one letter.
    """

    if not DASH_SEPARATOR.search(text):
        return None
    pieces = DASH_SEPARATOR.split(text)
    left = pieces[0].strip()
    right = pieces[1].strip() if len(pieces) > 1 else ""
    if not left or not right:
        return None
    if count_letters(left) == 0 or count_letters(right) == 0:
        return None
    return left, right


def _log_diagnostics(
    config: InterpretConfig,
    screen_type: ScreenType,
    ranked: list[ScoredTitle],
    extracted: dict[str, object],
) -> None:
    if not config.debug:
        return
    logger.info("classification=%s", screen_type.value)
    logger.info("top%d=%s", config.debug_top_n, [c.to_debug_dict() for c in ranked[: config.debug_top_n]])
    logger.info("extracted=%s", extracted)


def extract_music(
    lines: list[FeatureLine],
    screen_type: ScreenType,
    config: InterpretConfig | None = None,
) -> MusicGuess | None:
    """
    Pick the most plausible (title, artist) pair.

    Returns None when no candidate exists or confidence stays below ACCEPTANCE_THRESHOLD.
    """

    config = config or InterpretConfig()
    ranked = rank_title_candidates(lines)
    if not ranked:
        _log_diagnostics(config, screen_type, ranked, {"title": None, "artist": None, "confidenceScore": 0.0})
        return None

    top = ranked[0]
    split = split_combined_title_artist(top.line.text)
    if split is not None:
        title, artist = split
        confidence = clamp01(top.score * _DASH_SCORE_K + _DASH_BONUS[screen_type])
    else:
        artists = rank_artist_candidates(lines, top)
        title = top.line.text
        artist = artists[0].line.text if artists else None
        artist_score = artists[0].score if artists else 0.0
        confidence = clamp01(
            top.score * _TITLE_SHARE + artist_score * _ARTIST_SHARE + _CONTEXT_BOOST[screen_type]
        )

    _log_diagnostics(config, screen_type, ranked, {"title": title, "artist": artist, "confidenceScore": confidence})
    if confidence < ACCEPTANCE_THRESHOLD:
        return None
    return MusicGuess(title=title, artist=artist, confidence_score=confidence)
