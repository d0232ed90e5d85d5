from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .detection import BBox, Detection, coerce_number


class CapitalizationPattern(str, Enum):
    LOWER = "lower"
    UPPER = "upper"
    TITLE = "title"
    MIXED = "mixed"


class ScreenType(str, Enum):
    """Coarse layout label used to bias music extraction confidence."""

    MUSIC = "music"
    NOTES = "notes"
    GENERAL = "general"


@dataclass(frozen=True, slots=True)
class LogicalLine:
    """
    One reconstructed row of on-screen text.

    `bbox` is the union of every detection merged into the line; `avg_confidence`
    is weighted by character count of the merged pieces.
    """

    text: str
    avg_confidence: float
    bbox: BBox
    width_ratio: float
    height_ratio: float

    def as_detection(self) -> Detection:
        return Detection(text=self.text, confidence=self.avg_confidence, bbox=self.bbox)


@dataclass(frozen=True, slots=True)
class LineFeatures:
    length: int
    letter_ratio: float
    digit_ratio: float
    word_count: int
    avg_word_length: float
    capitalization_pattern: CapitalizationPattern
    height_percentile: float
    width_percentile: float
    vertical_position_percentile: float
    alignment_cluster: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "length": self.length,
            "letterRatio": self.letter_ratio,
            "digitRatio": self.digit_ratio,
            "wordCount": self.word_count,
            "avgWordLength": self.avg_word_length,
            "capitalizationPattern": self.capitalization_pattern.value,
            "heightPercentile": self.height_percentile,
            "widthPercentile": self.width_percentile,
            "verticalPositionPercentile": self.vertical_position_percentile,
            "alignmentCluster": self.alignment_cluster,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "LineFeatures":
        return LineFeatures(
            length=int(d["length"]),
            letter_ratio=float(d["letterRatio"]),
            digit_ratio=float(d["digitRatio"]),
            word_count=int(d["wordCount"]),
            avg_word_length=float(d["avgWordLength"]),
            capitalization_pattern=CapitalizationPattern(str(d["capitalizationPattern"])),
            height_percentile=float(d["heightPercentile"]),
            width_percentile=float(d["widthPercentile"]),
            vertical_position_percentile=float(d["verticalPositionPercentile"]),
            alignment_cluster=int(d["alignmentCluster"]),
        )


@dataclass(frozen=True, slots=True)
class FeatureLine:
    """A LogicalLine plus the statistics computed against the whole surviving line set."""

    text: str
    avg_confidence: float
    bbox: BBox
    width_ratio: float
    height_ratio: float
    features: LineFeatures

    def as_detection(self) -> Detection:
        return Detection(text=self.text, confidence=self.avg_confidence, bbox=self.bbox)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "avgConfidence": self.avg_confidence,
            "bbox": self.bbox.to_dict(),
            "widthRatio": self.width_ratio,
            "heightRatio": self.height_ratio,
            "features": self.features.to_dict(),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "FeatureLine":
        return FeatureLine(
            text=str(d.get("text", "")),
            avg_confidence=coerce_number(d.get("avgConfidence")),
            bbox=BBox.from_dict(d.get("bbox")),
            width_ratio=coerce_number(d.get("widthRatio")),
            height_ratio=coerce_number(d.get("heightRatio")),
            features=LineFeatures.from_dict(d["features"]),
        )


@dataclass(frozen=True, slots=True)
class MusicGuess:
    title: str | None
    artist: str | None
    confidence_score: float  # 0..1, always >= the acceptance threshold when emitted

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "artist": self.artist, "confidenceScore": self.confidence_score}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "MusicGuess":
        return MusicGuess(
            title=(None if d.get("title") is None else str(d.get("title"))),
            artist=(None if d.get("artist") is None else str(d.get("artist"))),
            confidence_score=coerce_number(d.get("confidenceScore")),
        )


@dataclass(frozen=True, slots=True)
class InterpretedResult:
    lines: list[FeatureLine]
    screen_type: ScreenType
    music: MusicGuess | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "lines": [line.to_dict() for line in self.lines],
            "screenType": self.screen_type.value,
        }
        # Absence of a guess is expressed by omitting the key.
        if self.music is not None:
            out["music"] = self.music.to_dict()
        return out

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "InterpretedResult":
        lines_raw = d.get("lines") or []
        if not isinstance(lines_raw, list):
            raise TypeError("InterpretedResult.lines must be a list")
        music_raw = d.get("music")
        return InterpretedResult(
            lines=[FeatureLine.from_dict(x) for x in lines_raw],
            screen_type=ScreenType(str(d.get("screenType", ScreenType.GENERAL.value))),
            music=(None if music_raw is None else MusicGuess.from_dict(music_raw)),
        )
