from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .artifacts import load_detections, write_interpretation_json_artifact
from .config import InterpretConfig
from .pipeline import interpret_ocr


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ocr-interpret",
        description="Interpret OCR detections: reading-order lines plus an optional title/artist guess.",
    )
    p.add_argument("--input", required=True, type=Path, help="JSON file with OCR detections.")
    p.add_argument("--output", required=True, type=Path, help="Path to write the interpretation JSON artifact.")
    p.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log title candidates and the final extraction (also enabled by RECOGNITION_DEBUG=1).",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics (default: WARNING; --debug implies INFO).",
    )
    return p


def _configure_logging(level: str, debug: bool) -> None:
    if debug and logging.getLevelName(level) > logging.INFO:
        level = "INFO"
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s: %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    env_config = InterpretConfig.from_env(os.environ)
    config = InterpretConfig(debug=args.debug or env_config.debug)
    _configure_logging(args.log_level, config.debug)

    try:
        detections = load_detections(args.input)
    except (OSError, ValueError, TypeError) as e:
        print(f"ocr-interpret: cannot read {args.input}: {e}", file=sys.stderr)
        return 2

    result = interpret_ocr(detections, config)
    write_interpretation_json_artifact(result=result, out_file=args.output)

    summary = {
        "lines": len(result.lines),
        "screen_type": result.screen_type.value,
        "music": None if result.music is None else result.music.to_dict(),
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
