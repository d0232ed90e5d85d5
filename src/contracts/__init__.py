"""
Canonical contracts for the OCR interpretation engine.

These models are the schema boundary between the external OCR collaborator, the
interpretation stages, and callers that persist or display results.

Stage code should consume/produce these contract objects (not ad-hoc dicts).
"""

from .detection import BBox, Detection, ImageBounds, coerce_number
from .interpretation import (
    CapitalizationPattern,
    FeatureLine,
    InterpretedResult,
    LineFeatures,
    LogicalLine,
    MusicGuess,
    ScreenType,
)

__all__ = [
    "BBox",
    "Detection",
    "ImageBounds",
    "coerce_number",
    "CapitalizationPattern",
    "ScreenType",
    "LogicalLine",
    "LineFeatures",
    "FeatureLine",
    "MusicGuess",
    "InterpretedResult",
]
