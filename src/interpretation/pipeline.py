from __future__ import annotations

from typing import Iterable

from contracts.detection import Detection
from contracts.interpretation import InterpretedResult

from .classify import classify_screen
from .config import InterpretConfig
from .features import extract_features
from .line_builder import reconstruct_lines
from .music import extract_music
from .noise import filter_noise
from .normalize import normalize_detections


def interpret_ocr(detections: Iterable[Detection], config: InterpretConfig | None = None) -> InterpretedResult:
    """
    Turn unordered OCR detections into reading-order lines and, when confident
    enough, a (title, artist) guess.

    Pure: no I/O, no shared state. Odd values are coerced rather than rejected, and
    an absent `music` field is the only "failure" signal.
    """

    config = config or InterpretConfig()
    config.validate()

    normalized = normalize_detections(detections)
    lines = extract_features(filter_noise(reconstruct_lines(normalized)))
    screen_type = classify_screen(lines)
    music = extract_music(lines, screen_type, config)
    return InterpretedResult(lines=lines, screen_type=screen_type, music=music)
