"""
Smoke test for the find-frustration command line.
"""

import io
import json
import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from frustration.cli import build_parser, main, resolve_config


QUBIST_TRIANGLE = "3 3\n0 1 -1\n1 2 -1\n0 2 1\n"


@pytest.fixture
def qubist_file(tmp_path):
    path = tmp_path / "triangle.qubist"
    path.write_text(QUBIST_TRIANGLE)
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in list(os.environ):
        if var.startswith("FRUSTRATION_"):
            monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)


def test_report_to_stdout(qubist_file, capsys):
    assert main([str(qubist_file), "--deterministic"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "#BCS 1"
    assert out[-1] == "#FC  1 / 1 = 1.000000"


def test_report_to_file(qubist_file, tmp_path):
    output = tmp_path / "report.txt"

    assert main([str(qubist_file), "-o", str(output)]) == 0
    assert output.read_text().startswith("#BCS 1\n")


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("A B 1\nB C 1\nC A 1\n"))

    assert main(["-f", "qmasm", "--all-cycles"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[:2] == ["#BCS 1", "#ECS 1"]
    # Three antiferromagnetic couplers
    assert "FC   A B C" in out


def test_malformed_input_fails(tmp_path, capsys):
    path = tmp_path / "bad.qubist"
    path.write_text("header\n0 1\n")

    assert main([str(path)]) == 1
    assert "#BCS" not in capsys.readouterr().out


def test_undecodable_input_fails(tmp_path, capsys):
    path = tmp_path / "binary.qubist"
    path.write_bytes(b"3 3\n0 1 \xff\xfe\n")

    assert main([str(path)]) == 1
    assert "#BCS" not in capsys.readouterr().out


def test_undecodable_stdin_fails(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"A B \xff\n"), encoding="utf-8"))

    assert main(["-f", "qmasm"]) == 1


def test_missing_input_fails(tmp_path):
    assert main([str(tmp_path / "missing.qubist")]) == 1


def test_enumeration_limit_fails(tmp_path):
    path = tmp_path / "k4.qubist"
    path.write_text("4 6\n0 1 1\n0 2 1\n0 3 1\n1 2 1\n1 3 1\n2 3 1\n")

    assert main([str(path), "--all-cycles", "--max-cycles", "2"]) == 1


def test_unknown_format_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["-f", "csv"])
    assert exc.value.code == 2


def test_summary_jsonl(qubist_file, tmp_path):
    summary = tmp_path / "summary.jsonl"

    assert main([str(qubist_file), "-o", os.devnull, "--summary-jsonl", str(summary)]) == 0

    record = json.loads(summary.read_text().splitlines()[0])
    assert record["basic_cycles"] == 1
    assert record["frustrated_cycles"] == 1


def test_command_line_overrides_config_file(tmp_path, monkeypatch):
    config_path = tmp_path / "custom.yaml"
    config_path.write_text("input:\n  format: qmasm\nenumeration:\n  num_workers: 2\n")
    monkeypatch.setenv("FRUSTRATION_WORKERS", "3")

    args = build_parser().parse_args(["--config", str(config_path), "-f", "qubo"])
    config = resolve_config(args)

    assert config.input.format == "qubo"
    assert config.enumeration.num_workers == 3


def test_wrongly_typed_config_file_fails(qubist_file, tmp_path, capsys):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("enumeration:\n  num_workers: many\n")

    assert main(["--config", str(config_path), str(qubist_file)]) == 1
    assert capsys.readouterr().out == ""


def test_invalid_config_value_fails(tmp_path):
    assert main(["--workers", "0", str(tmp_path / "unused")]) == 1
