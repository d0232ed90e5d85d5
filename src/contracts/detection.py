from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


def coerce_number(value: Any) -> float:
    """
    Lenient numeric coercion used at the input boundary.

    Non-numeric and non-finite values become 0.0; booleans are not numbers here.
    """

    if isinstance(value, bool):
        return 0.0
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    return out if math.isfinite(out) else 0.0


def _coerce_extent(value: Any) -> float:
    # Geometry is non-negative; anything else collapses to 0.
    return max(0.0, coerce_number(value))


@dataclass(frozen=True, slots=True)
class BBox:
    """
    Screen-space box, top-left origin:
    - (x, y) is the top-left corner
    - width/height extend right/down
    """

    x: float
    y: float
    width: float
    height: float

    def right(self) -> float:
        return self.x + self.width

    def bottom(self) -> float:
        return self.y + self.height

    def center_y(self) -> float:
        return self.y + self.height / 2.0

    def union(self, other: "BBox") -> "BBox":
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        right = max(self.right(), other.right())
        bottom = max(self.bottom(), other.bottom())
        return BBox(x=left, y=top, width=right - left, height=bottom - top)

    def contains(self, other: "BBox") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right() <= self.right()
            and other.bottom() <= self.bottom()
        )

    def coerced(self) -> "BBox":
        return BBox(
            x=_coerce_extent(self.x),
            y=_coerce_extent(self.y),
            width=_coerce_extent(self.width),
            height=_coerce_extent(self.height),
        )

    @staticmethod
    def from_dict(d: Any) -> "BBox":
        if not isinstance(d, dict):
            # Missing or malformed geometry is treated as an empty box at the origin.
            return BBox(0.0, 0.0, 0.0, 0.0)
        return BBox(
            x=_coerce_extent(d.get("x")),
            y=_coerce_extent(d.get("y")),
            width=_coerce_extent(d.get("width")),
            height=_coerce_extent(d.get("height")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class Detection:
    """
    Single OCR text fragment as reported by the external recognizer.

    `confidence` is on a 0..100 scale.
    """

    text: str
    confidence: float
    bbox: BBox

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Detection":
        if not isinstance(d, dict):
            raise TypeError("Detection must be a JSON object")
        text = d.get("text")
        return Detection(
            text="" if text is None else str(text),
            confidence=coerce_number(d.get("confidence")),
            bbox=BBox.from_dict(d.get("bbox")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "confidence": self.confidence, "bbox": self.bbox.to_dict()}


@dataclass(frozen=True, slots=True)
class ImageBounds:
    """Extent of all detections, floored at 1 so ratios never divide by zero."""

    width: float
    height: float
