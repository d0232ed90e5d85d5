from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.detection import Detection
from contracts.interpretation import InterpretedResult


def load_detections(in_file: Path) -> list[Detection]:
    """
    Read detections from a JSON artifact.

    Accepts a bare list, or an object carrying the list under `detections` (or `blocks`).
    """

    raw: Any = json.loads(in_file.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("detections", raw.get("blocks"))
    if not isinstance(raw, list):
        raise TypeError("detections artifact must be a list or an object with a 'detections' list")
    return [Detection.from_dict(d) for d in raw]


def serialize_interpreted_result(result: InterpretedResult) -> str:
    payload: dict[str, Any] = result.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_interpretation_json_artifact(*, result: InterpretedResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_interpreted_result(result), encoding="utf-8")
