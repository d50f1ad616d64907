"""Tests for CLI tool."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from yeson import DecodeError, UnsupportedTypeError, __version__, decode, encode
from yeson.cli.inspect import describe_stream
from yeson.cli.main import main


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = subprocess.run(
        [sys.executable, "-m", "yeson.cli.main", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "yeson: compact binary serialization" in result.stdout
    assert "--inspect" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "yeson.cli.main", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert f"yeson {__version__}" in result.stdout


def test_cli_no_args(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with no arguments (should show help)."""
    assert main([]) == 0
    assert "usage: yeson" in capsys.readouterr().out


def test_cli_missing_file(capsys: pytest.CaptureFixture[str]) -> None:
    """Test CLI with a missing input file."""
    assert main(["--inspect", "nonexistent.yeson"]) == 1
    assert "File not found" in capsys.readouterr().err


def test_cli_commands_are_exclusive() -> None:
    """Only one command may be given."""
    with pytest.raises(SystemExit):
        main(["--inspect", "a", "--to-json", "b"])


def test_cli_from_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test encoding a JSON file."""
    source = tmp_path / "doc.json"
    source.write_text(json.dumps({"a": 1, "b": [True, None, "x"]}), encoding="utf-8")
    target = tmp_path / "doc.yeson"

    assert main(["--from-json", str(source), "-o", str(target)]) == 0
    assert target.read_bytes() == b"\x62\x21a\x31\x01\x21b\x53\x11\x00\x21x"
    assert "Wrote 12 bytes" in capsys.readouterr().out


def test_cli_from_json_requires_output(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """--from-json without -o is an error."""
    source = tmp_path / "doc.json"
    source.write_text("{}", encoding="utf-8")

    assert main(["--from-json", str(source)]) == 1
    assert "requires -o" in capsys.readouterr().err


def test_cli_from_json_unencodable(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """JSON documents outside the format's limits fail cleanly."""
    source = tmp_path / "doc.json"
    source.write_text(json.dumps(list(range(300))), encoding="utf-8")

    assert main(["--from-json", str(source), "-o", str(tmp_path / "out.yeson")]) == 1
    assert "exceeds the maximum of 255" in capsys.readouterr().err


def test_cli_to_json_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing a yeson file as JSON."""
    source = tmp_path / "doc.yeson"
    source.write_bytes(encode({"name": "héllo", "values": [1, -2, 2.5]}))

    assert main(["--to-json", str(source)]) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == {"name": "héllo", "values": [1, -2, 2.5]}
    assert '  "name": "héllo"' in out


def test_cli_to_json_file(tmp_path: Path) -> None:
    """Test writing JSON to a file."""
    source = tmp_path / "doc.yeson"
    source.write_bytes(encode([None, False]))
    target = tmp_path / "doc.json"

    assert main(["--to-json", str(source), "-o", str(target)]) == 0
    assert json.loads(target.read_text(encoding="utf-8")) == [None, False]


def test_cli_json_roundtrip(tmp_path: Path) -> None:
    """JSON -> yeson -> JSON preserves the document."""
    document = {"nested": {"list": [1, 2.5, "three", None, True]}, "big": 2**40}
    source = tmp_path / "in.json"
    source.write_text(json.dumps(document), encoding="utf-8")

    assert main(["--from-json", str(source), "-o", str(tmp_path / "mid.yeson")]) == 0
    assert main(["--to-json", str(tmp_path / "mid.yeson"), "-o", str(tmp_path / "out.json")]) == 0
    assert json.loads((tmp_path / "out.json").read_text(encoding="utf-8")) == document


def test_cli_to_json_corrupt(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Corrupt input reports an error."""
    source = tmp_path / "bad.yeson"
    source.write_bytes(b"\x32\x01")

    assert main(["--to-json", str(source)]) == 1
    assert "Unexpected end of input" in capsys.readouterr().err


def test_cli_inspect(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the per-value breakdown."""
    source = tmp_path / "doc.yeson"
    source.write_bytes(encode({"a": 1, "b": [True, None, "x"]}))

    assert main(["--inspect", str(source)]) == 0
    out = capsys.readouterr().out
    assert "doc.yeson" in out
    assert "Total size: 12 bytes" in out
    assert "2 pairs" in out
    assert "'b': 3 items" in out


def test_describe_stream() -> None:
    """Each value gets one line with offset, header, type and info."""
    lines = describe_stream(encode({"a": 1, "b": [True, None, "x"]}) + encode(-200))

    assert lines == [
        "000000  0x62    object  0010  2 pairs",
        "000003  0x31    int     0001    'a': UInt8(1) (2 bytes)",
        "000007  0x53    array   0011    'b': 3 items",
        "000008  0x11    bool    0001      True (1 bytes)",
        "000009  0x00    null    0000      None (1 bytes)",
        "00000a  0x21    string  0001      'x' (2 bytes)",
        "00000c  0x3a    int     1010  Int16(-200) (3 bytes)",
    ]


def test_describe_stream_rejects_bad_tag() -> None:
    """Unknown tags are reported."""
    with pytest.raises(UnsupportedTypeError):
        describe_stream(b"\x00\x90")


def test_describe_matches_decode() -> None:
    """Inspection walks the same bytes the decoder reads."""
    data = encode([{"k": [1, 2, {"deep": "v"}]}, "tail"])
    assert decode(data)[1] == "tail"
    assert describe_stream(data)[-1].endswith("'tail' (5 bytes)")


def test_cli_inspect_too_deep(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Nesting beyond max_depth is reported as an error, not a crash."""
    source = tmp_path / "deep.yeson"
    source.write_bytes(b"\x51" * 3000 + b"\x00")

    assert main(["--inspect", str(source)]) == 1
    err = capsys.readouterr().err
    assert "Error" in err
    assert "max_depth=64" in err


def test_describe_stream_depth_limit() -> None:
    """Inspection accepts exactly max_depth nested composites."""
    assert len(describe_stream(b"\x51" * 64 + b"\x00")) == 65
    with pytest.raises(DecodeError, match="max_depth"):
        describe_stream(b"\x51" * 65 + b"\x00")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), [1, {"x": float("-inf")}]])
def test_cli_to_json_rejects_non_finite(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], value: object
) -> None:
    """NaN and infinities have no JSON form and are reported as errors."""
    source = tmp_path / "doc.yeson"
    source.write_bytes(encode(value))
    target = tmp_path / "doc.json"

    assert main(["--to-json", str(source), "-o", str(target)]) == 1
    assert "Error" in capsys.readouterr().err
    assert not target.exists()
