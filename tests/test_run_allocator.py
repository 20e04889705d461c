import io
from pathlib import Path

import pytest

import bench
import run_allocator

ROOT = Path(__file__).resolve().parents[1]
TRACE = ROOT / "traces" / "fragmentation_stressor.txt"


def test_invalid_size_is_fatal(capsys):
    assert run_allocator.main(["12abc"]) == 1
    captured = capsys.readouterr()
    assert "Further characters after number: abc" in captured.err
    assert "Contiguous Memory Allocator Project" in captured.out


def test_size_over_custom_limit_is_fatal(capsys):
    assert run_allocator.main(["2048", "--max-size", "1024"]) == 1
    assert "Must be > 0 and <= 1024" in capsys.readouterr().err


def test_console_session(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("RQ P0 40 F\nRQ P1 20 B\nRL P0\nSTAT\nX\nRQ P2 1 F\n"))
    assert run_allocator.main(["100"]) == 0
    out = capsys.readouterr().out
    assert "Allocated 40 bytes to P0 starting at address 0" in out
    assert "Allocated 20 bytes to P1 starting at address 40" in out
    assert "Addresses [0: 39] Unused" in out
    assert "Addresses [40: 59] P1" in out
    assert "Addresses [60: 99] Unused" in out
    assert "P2" not in out


def test_console_session_ends_at_eof(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("RQ P0 10 W\n"))
    assert run_allocator.main(["100", "--summary"]) == 0
    out = capsys.readouterr().out
    assert "Requests: ok=1 failed=0" in out


def test_script_replay_echoes_commands(tmp_path, capsys):
    script = tmp_path / "cmds.txt"
    script.write_text("# setup\nRQ A 10 F\nRQ B 10 F\nRL A\nC\nSTAT\n")
    assert run_allocator.main(["30", "--script", str(script), "--show-map"]) == 0
    out = capsys.readouterr().out
    assert "allocator> RQ A 10 F" in out
    assert "Memory compaction completed." in out
    assert "Addresses [0: 9] B" in out
    assert "Addresses [10: 29] Unused" in out
    assert "Compactions: 1  Bytes moved: 10" in out
    assert "Memory map (ASCII):" in out


def test_missing_script(tmp_path, capsys):
    assert run_allocator.main(["30", "--script", str(tmp_path / "nope.txt")]) == 1
    assert "Cannot read script" in capsys.readouterr().err


@pytest.mark.parametrize("strategy", ["F", "B", "W"])
def test_stressor_trace_summary_parses(strategy, capsys):
    assert run_allocator.main(["1000", "--script", str(TRACE), "--strategy", strategy, "--summary"]) == 0
    m = bench.parse(capsys.readouterr().out)
    assert m["requests"] + m["request_failures"] == 17
    assert m["compactions"] == 1
    assert m["used"] <= 1000
    assert 0.0 <= m["external_frag"] <= 1.0
