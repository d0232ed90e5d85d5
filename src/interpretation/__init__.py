"""
OCR interpretation engine.

Pipeline (each stage consumes the previous stage's output in full):
- normalize: clean raw detections
- line_builder: group/merge detections into reading-order lines
- noise: drop UI chrome, clocks, low-confidence and symbol-only lines
- features: per-line text statistics and percentile ranks
- classify: music / notes / general screen label
- music: title/artist scoring with an acceptance threshold

No recognition, no network, no persisted state.
"""

from .classify import classify_screen
from .config import InterpretConfig
from .features import extract_features
from .line_builder import compute_image_bounds, reconstruct_lines
from .music import ACCEPTANCE_THRESHOLD, extract_music
from .noise import filter_noise, is_noise
from .normalize import normalize_detections
from .pipeline import interpret_ocr

__all__ = [
    "ACCEPTANCE_THRESHOLD",
    "InterpretConfig",
    "classify_screen",
    "compute_image_bounds",
    "extract_features",
    "extract_music",
    "filter_noise",
    "interpret_ocr",
    "is_noise",
    "normalize_detections",
    "reconstruct_lines",
]
