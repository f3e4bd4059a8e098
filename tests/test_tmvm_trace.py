from __future__ import annotations

import json
from pathlib import Path

import pytest

from tmvm_trace import Snapshot, TraceFormatError, load_trace, parse_trace

SAMPLE = Path(__file__).resolve().parents[1] / "samples" / "demo_trace.json"


def _write(tmp_path: Path, raw) -> Path:
    path = tmp_path / "trace.json"
    path.write_text(json.dumps(raw), encoding="utf-8")
    return path


def test_load_sample_trace() -> None:
    trace = load_trace(SAMPLE)
    assert trace.name == "demo_trace"
    assert trace.input == ("a", "a", "b")
    assert trace.total_steps == len(trace) == 4
    assert [s.step for s in trace] == [0, 1, 2, 3]
    last = trace[3]
    assert last == Snapshot(state="q1", symbol=None, tape=("a", "a", "b", None), step=3, total_steps=4)


def test_step_defaults_to_position() -> None:
    trace = parse_trace({"steps": [{"state": "A"}, {"state": "B", "symbol": "1"}]})
    assert [(s.state, s.symbol, s.step) for s in trace] == [("A", None, 0), ("B", "1", 1)]
    assert trace.input == ()
    assert trace.name == "trace"


def test_total_steps_may_exceed_recorded_steps() -> None:
    trace = parse_trace({"total_steps": 3, "steps": [{"state": "A", "step": 2}]})
    assert trace.total_steps == 3
    assert trace[0].total_steps == 3


@pytest.mark.parametrize(
    "raw, message",
    [
        ([], "root must be a JSON object"),
        ({"steps": []}, "steps must be a non-empty array"),
        ({"steps": [{"state": ""}]}, r"steps\[0\].state"),
        ({"steps": [{"state": "A", "step": 1}]}, r"steps\[0\].step must be an int in \[0, 1\)"),
        ({"steps": [{"state": "A", "step": 0}, {"state": "B", "step": 0}]}, "recorded twice"),
        ({"steps": [{"state": "A", "symbol": 1}]}, r"steps\[0\].symbol"),
        ({"steps": [{"state": "A", "tape": "ab"}]}, r"steps\[0\].tape must be an array"),
        ({"input": ["a", 2], "steps": [{"state": "A"}]}, r"input\[1\]"),
        ({"total_steps": 0, "steps": [{"state": "A"}]}, "total_steps"),
    ],
)
def test_invalid_traces_are_rejected(raw, message) -> None:
    with pytest.raises(TraceFormatError, match=message):
        parse_trace(raw)


def test_invalid_json_reports_location(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{\n  nope", encoding="utf-8")
    with pytest.raises(TraceFormatError, match="invalid JSON"):
        load_trace(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TraceFormatError, match="file not found"):
        load_trace(tmp_path / "nope.json")


def test_snapshot_str_mentions_blank() -> None:
    text = str(Snapshot("q0", None, ("a", None), 1, 2))
    assert "BLANK" in text and "tape=a" in text
