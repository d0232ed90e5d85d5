from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key

from contracts.detection import BBox, Detection, ImageBounds
from contracts.interpretation import LogicalLine

from .text import collapse_whitespace

# Positions closer than this are treated as equal before falling back to x.
_POSITION_EPSILON = 0.001

_MIN_Y_THRESHOLD = 4.0
_Y_THRESHOLD_K = 0.6  # y_threshold = max(4, average_height * k)

_MIN_X_GAP = 2.0
_X_GAP_K = 0.4  # merge when gap <= max(2, min(height_a, height_b) * k)


@dataclass(frozen=True, slots=True)
class _Piece:
    text: str
    confidence: float
    bbox: BBox


def compute_image_bounds(detections: list[Detection]) -> ImageBounds:
    max_x = 1.0
    max_y = 1.0
    for det in detections:
        max_x = max(max_x, det.bbox.right())
        max_y = max(max_y, det.bbox.bottom())
    return ImageBounds(width=max_x, height=max_y)


def _center_order(a: Detection, b: Detection) -> int:
    # Vertical center asc (tie x asc).
    ay = a.bbox.center_y()
    by = b.bbox.center_y()
    if abs(ay - by) > _POSITION_EPSILON:
        return -1 if ay < by else 1
    if a.bbox.x != b.bbox.x:
        return -1 if a.bbox.x < b.bbox.x else 1
    return 0


def _line_order(a: LogicalLine, b: LogicalLine) -> int:
    # Reading order: top edge asc (tie x asc).
    if abs(a.bbox.y - b.bbox.y) > _POSITION_EPSILON:
        return -1 if a.bbox.y < b.bbox.y else 1
    if a.bbox.x != b.bbox.x:
        return -1 if a.bbox.x < b.bbox.x else 1
    return 0


def _group_rows(ordered: list[Detection], y_threshold: float) -> list[list[int]]:
    """
    Assign each detection (by index into `ordered`) to the first row whose middle
    member has a vertical center within `y_threshold`.

    Comparing against the middle member rather than a running mean keeps rows
    stable when a row straddles a baseline.
    """

    rows: list[list[int]] = []
    for idx, det in enumerate(ordered):
        center = det.bbox.center_y()
        for members in rows:
            anchor = ordered[members[len(members) // 2]]
            if abs(center - anchor.bbox.center_y()) <= y_threshold:
                members.append(idx)
                break
        else:
            rows.append([idx])
    return rows


def _merge_pieces(last: _Piece, part: _Piece) -> _Piece:
    total_chars = max(1, len(last.text) + len(part.text))
    confidence = (last.confidence * len(last.text) + part.confidence * len(part.text)) / total_chars
    return _Piece(
        text=collapse_whitespace(f"{last.text} {part.text}"),
        confidence=confidence,
        bbox=last.bbox.union(part.bbox),
    )


def _merge_row(row: list[Detection]) -> list[_Piece]:
    merged: list[_Piece] = []
    for det in sorted(row, key=lambda d: d.bbox.x):
        part = _Piece(text=det.text, confidence=det.confidence, bbox=det.bbox)
        if not merged:
            merged.append(part)
            continue

        last = merged[-1]
        gap = part.bbox.x - last.bbox.right()
        max_gap = max(_MIN_X_GAP, min(last.bbox.height, part.bbox.height) * _X_GAP_K)
        if gap <= 0 or gap <= max_gap:
            merged[-1] = _merge_pieces(last, part)
        else:
            merged.append(part)
    return merged


def reconstruct_lines(detections: list[Detection]) -> list[LogicalLine]:
    """
    Group normalized detections into printed rows, then merge horizontally
    adjacent pieces of each row into contiguous lines.

    Output is in reading order: top edge, then left edge.
    """

    if not detections:
        return []

    ordered = sorted(detections, key=cmp_to_key(_center_order))
    image = compute_image_bounds(ordered)
    average_height = sum(d.bbox.height for d in ordered) / len(ordered)
    y_threshold = max(_MIN_Y_THRESHOLD, average_height * _Y_THRESHOLD_K)

    lines: list[LogicalLine] = []
    for members in _group_rows(ordered, y_threshold):
        for piece in _merge_row([ordered[i] for i in members]):
            lines.append(
                LogicalLine(
                    text=piece.text,
                    avg_confidence=piece.confidence,
                    bbox=piece.bbox,
                    width_ratio=piece.bbox.width / image.width,
                    height_ratio=piece.bbox.height / image.height,
                )
            )

    return sorted(lines, key=cmp_to_key(_line_order))
