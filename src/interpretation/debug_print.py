from __future__ import annotations

import argparse
from pathlib import Path

from contracts.detection import BBox

from .artifacts import load_detections
from .config import InterpretConfig
from .music import rank_title_candidates
from .pipeline import interpret_ocr


def _bbox_str(b: BBox) -> str:
    return f"({b.x:g},{b.y:g}) {b.width:g}x{b.height:g}"


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ocr-interpret-debug")
    ap.add_argument("--input", required=True, type=Path, help="JSON file with OCR detections.")
    ap.add_argument(
        "--top",
        type=int,
        default=InterpretConfig().debug_top_n,
        help="Number of title candidates to show.",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    result = interpret_ocr(load_detections(args.input))

    print(f"screen_type={result.screen_type.value} lines={len(result.lines)}")

    print("\n-- LINES (reading order) --")
    for i, line in enumerate(result.lines):
        f = line.features
        print(f"{i:03d} bbox={_bbox_str(line.bbox)} conf={line.avg_confidence:.1f} :: {line.text}")
        print(
            f"  letters={f.letter_ratio:.2f} digits={f.digit_ratio:.2f} words={f.word_count}"
            f" caps={f.capitalization_pattern.value} h%={f.height_percentile:.2f}"
            f" w%={f.width_percentile:.2f} y%={f.vertical_position_percentile:.2f}"
            f" cluster={f.alignment_cluster}"
        )

    print("\n-- TITLE CANDIDATES --")
    for c in rank_title_candidates(result.lines)[: max(0, args.top)]:
        print(
            f"{c.score:.3f} vp={c.visual_prominence:.3f} tq={c.text_quality:.3f} :: {c.line.text}"
        )

    print("\n-- MUSIC --")
    if result.music is None:
        print("(no guess)")
    else:
        m = result.music
        print(f"title={m.title!r} artist={m.artist!r} confidence={m.confidence_score:.3f}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
