import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from jsonl_tools.cli import main

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def test_cli_reports_scenario(write_jsonl, capsys):
    p = write_jsonl([{"a": 1}, {"a": 1, "b": 2}, {"a": 1}])
    assert main(["--filename", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Found 2 unique JSON keys in file data.jsonl" in out
    assert "Rows with missing keys: [0, 2]" in out
    assert "1. (a) - 2 occurrences" in out
    assert "2. (a, b) - 1 occurrence" in out


def test_cli_equals_form(write_jsonl, capsys):
    p = write_jsonl([{"a": 1}])
    assert main([f"--filename={p}"]) == 0
    assert "Found 1 unique JSON keys" in capsys.readouterr().out


def test_cli_missing_file_exits_nonzero(tmp_path, capsys):
    assert main(["--filename", str(tmp_path / "nope.jsonl")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "no such file" in captured.err


def test_cli_requires_filename(capsys):
    with pytest.raises(SystemExit) as ei:
        main([])
    assert ei.value.code == 2


def test_cli_partial_results_with_failures(write_jsonl, capsys):
    p = write_jsonl(['{"a": 1}', "[1,2,3]", "{broken", '{"a": 2}'])
    assert main(["--filename", str(p)]) == 0
    captured = capsys.readouterr()
    assert "Rows analyzed: 2" in captured.out
    assert "Lines failed to parse: 2" in captured.out
    assert "2 line(s) failed to parse" in captured.err


def test_cli_idempotent(write_jsonl, capsys):
    p = write_jsonl([{"x": 1, "y": 2}, {"y": 1}, {"x": 0}, {"z": None}])
    main(["--filename", str(p)])
    first = capsys.readouterr().out
    main(["--filename", str(p)])
    second = capsys.readouterr().out
    assert first == second


def test_cli_top_and_record(write_jsonl, capsys):
    p = write_jsonl([{"a": 1}, {"b": 1}, {"c": 1}, {"a": 2, "b": 3}])
    assert main(["--filename", str(p), "--top", "1", "--record", "3"]) == 0
    out = capsys.readouterr().out
    assert "Top 1 most frequent" in out
    assert "2. (" not in out
    assert "Analysis of Record 3:" in out
    assert "Missing keys in this record: ['c']" in out


def test_cli_config_and_ndjson_log(write_jsonl, tmp_path, capsys):
    p = write_jsonl([{"a": 1}, {"a": 2, "b": 1}])
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("report:\n  top_n: 1\n", encoding="utf-8")
    logdir = tmp_path / "logs"
    assert main(["--filename", str(p), "--config", str(cfg), "--ndjson-log", str(logdir)]) == 0
    assert "Top 1 most frequent" in capsys.readouterr().out
    files = list(logdir.glob("jsonl_tools_*.ndjson"))
    assert len(files) == 1
    entry = json.loads(files[0].read_text(encoding="utf-8").splitlines()[0])
    assert entry["type"] == "summary"
    assert entry["data"]["rows_parsed"] == 2
    assert entry["data"]["unique_keys"] == 2
    assert entry["data"]["rows_with_missing_keys"] == 1


def test_cli_bad_config_exits_nonzero(write_jsonl, tmp_path):
    p = write_jsonl([{"a": 1}])
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("report:\n  nope: 1\n", encoding="utf-8")
    assert main(["--filename", str(p), "--config", str(cfg)]) == 1


def test_module_entry_point(write_jsonl):
    p = write_jsonl([{"a": 1}])
    res = subprocess.run(
        [sys.executable, "-m", "jsonl_tools", "--filename", str(p)],
        capture_output=True, text=True, env=dict(os.environ, PYTHONPATH=str(SRC_DIR)),
    )
    assert res.returncode == 0, res.stderr
    assert "Found 1 unique JSON keys" in res.stdout


def test_cli_bare_carriage_return_is_not_a_line_break(tmp_path, capsys):
    p = tmp_path / "data.jsonl"
    p.write_bytes(b'{"a": 1,\r "b": 2}\n{"a": 1}\r\n')
    assert main(["--filename", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Rows analyzed: 2" in out
    assert "failed to parse" not in out
    assert "Rows with missing keys: [1]" in out


@pytest.mark.parametrize("top", ["0", "-3", "many"])
def test_cli_rejects_non_positive_top(write_jsonl, top, capsys):
    p = write_jsonl([{"a": 1}])
    with pytest.raises(SystemExit) as ei:
        main(["--filename", str(p), "--top", top])
    assert ei.value.code == 2
    assert capsys.readouterr().out == ""
