from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from contracts.interpretation import InterpretedResult
from interpretation import cli, debug_print
from interpretation.artifacts import load_detections
from interpretation.config import InterpretConfig

DETECTIONS = [
    {"text": "12:01", "confidence": 90, "bbox": {"x": 20, "y": 20, "width": 50, "height": 10}},
    {"text": "Blinding", "confidence": 92, "bbox": {"x": 180, "y": 420, "width": 220, "height": 58}},
    {"text": "Lights", "confidence": 92, "bbox": {"x": 408, "y": 420, "width": 140, "height": 58}},
    {"text": "The Weeknd", "confidence": 92, "bbox": {"x": 182, "y": 496, "width": 250, "height": 42}},
    {"text": "Shuffle", "confidence": 89, "bbox": {"x": 35, "y": 650, "width": 90, "height": 18}},
]


class TestInterpretCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, payload: object) -> Path:
        p = self.root / name
        p.write_text(json.dumps(payload), encoding="utf-8")
        return p

    def test_writes_artifact_and_summary(self) -> None:
        in_file = self._write("detections.json", DETECTIONS)
        out_file = self.root / "out" / "result.json"

        stdout = io.StringIO()
        with redirect_stdout(stdout):
            rc = cli.main(["--input", str(in_file), "--output", str(out_file)])
        self.assertEqual(rc, 0)

        summary = json.loads(stdout.getvalue())
        self.assertEqual(summary["lines"], 3)
        self.assertEqual(summary["screen_type"], "music")
        self.assertEqual(summary["music"]["title"], "Blinding Lights")

        text = out_file.read_text(encoding="utf-8")
        self.assertTrue(text.endswith("\n"))
        result = InterpretedResult.from_dict(json.loads(text))
        assert result.music is not None
        self.assertEqual(result.music.artist, "The Weeknd")
        self.assertEqual(result.lines[0].text, "Blinding Lights")

    def test_accepts_wrapped_detection_lists(self) -> None:
        for key in ("detections", "blocks"):
            in_file = self._write(f"{key}.json", {key: DETECTIONS})
            self.assertEqual(len(load_detections(in_file)), len(DETECTIONS))

    def test_unreadable_input_exits_with_2(self) -> None:
        bad = self.root / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        stderr = io.StringIO()
        with redirect_stderr(stderr), redirect_stdout(io.StringIO()):
            rc = cli.main(["--input", str(bad), "--output", str(self.root / "x.json")])
        self.assertEqual(rc, 2)
        self.assertIn("cannot read", stderr.getvalue())
        self.assertFalse((self.root / "x.json").exists())

    def test_wrong_shape_exits_with_2(self) -> None:
        in_file = self._write("shape.json", {"items": []})
        with redirect_stderr(io.StringIO()), redirect_stdout(io.StringIO()):
            rc = cli.main(["--input", str(in_file), "--output", str(self.root / "y.json")])
        self.assertEqual(rc, 2)

    def test_debug_print_runs(self) -> None:
        in_file = self._write("detections.json", DETECTIONS)
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            rc = debug_print.main(["--input", str(in_file)])
        self.assertEqual(rc, 0)
        out = stdout.getvalue()
        self.assertIn("screen_type=music", out)
        self.assertIn("title='Blinding Lights'", out)

    def test_debug_print_top_defaults_to_config(self) -> None:
        args = debug_print.build_arg_parser().parse_args(["--input", "d.json"])
        self.assertEqual(args.top, InterpretConfig().debug_top_n)

    def test_debug_print_limits_title_candidates(self) -> None:
        in_file = self._write("detections.json", DETECTIONS)
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            rc = debug_print.main(["--input", str(in_file), "--top", "1"])
        self.assertEqual(rc, 0)
        section = stdout.getvalue().split("-- TITLE CANDIDATES --")[1].split("-- MUSIC --")[0]
        self.assertEqual([l for l in section.splitlines() if l.strip()], [section.strip()])
        self.assertIn("Blinding Lights", section)


class TestInterpretConfig(unittest.TestCase):
    def test_env_flag(self) -> None:
        for raw, expected in (
            ("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False), ("on", False),
            (" 1 ", False), ("1\n", False), ("yes please", False),
        ):
            self.assertEqual(InterpretConfig.from_env({"RECOGNITION_DEBUG": raw}).debug, expected, raw)
        self.assertFalse(InterpretConfig.from_env({}).debug)

    def test_cli_reads_env_flag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            in_file = Path(tmp) / "d.json"
            in_file.write_text(json.dumps(DETECTIONS), encoding="utf-8")
            with patch.dict(os.environ, {"RECOGNITION_DEBUG": "1"}):
                with self.assertLogs("interpretation.music", level="INFO"), redirect_stdout(io.StringIO()):
                    rc = cli.main(["--input", str(in_file), "--output", str(Path(tmp) / "out.json")])
        self.assertEqual(rc, 0)

    def test_invalid_config(self) -> None:
        with self.assertRaises(ValueError):
            InterpretConfig(debug_top_n=0)


if __name__ == "__main__":
    unittest.main()
