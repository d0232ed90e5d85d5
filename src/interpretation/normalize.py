from __future__ import annotations

from typing import Iterable

from contracts.detection import Detection, coerce_number

from .text import normalize_text


def normalize_detections(detections: Iterable[Detection]) -> list[Detection]:
    """
    Clean raw OCR detections.

    - strip zero-width characters, trim, collapse whitespace runs
    - drop detections whose text ends up empty
    - coerce non-finite confidence and geometry to 0

    Input order is preserved; reading order is established by line reconstruction.
    """

    out: list[Detection] = []
    for det in detections:
        text = normalize_text(det.text or "")
        if not text:
            continue
        out.append(
            Detection(
                text=text,
                confidence=coerce_number(det.confidence),
                bbox=det.bbox.coerced(),
            )
        )
    return out
