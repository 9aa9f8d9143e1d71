from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from loxpy import Stage, run_file, run_source
from loxpy.cli import ExitCode, main


def _script(tmp_path: Path, src: str) -> str:
    p = tmp_path / "script.lox"
    p.write_text(src, encoding="utf-8")
    return str(p)


def test_run_script(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_script(tmp_path, "var a = 1; // one\nprint a + 2;\n")])
    out, err = capsys.readouterr()
    assert code == ExitCode.OK
    assert out == "Number(3.0)\n"
    assert err == ""


def test_scan_errors_exit_65(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_script(tmp_path, "print 1;\n@\n")])
    out, err = capsys.readouterr()
    assert code == ExitCode.DATAERR == 65
    assert out == ""
    assert err == "[line: 2, col: 1] Scanning Error (Unexpected character): @\n"


def test_parse_errors_exit_65(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_script(tmp_path, "print 1; 1 2; 3 4;")])
    out, err = capsys.readouterr()
    assert code == 65
    assert out == ""
    assert len(err.splitlines()) == 2


def test_runtime_error_exit_70(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_script(tmp_path, 'print 1; print "a" * 2;')])
    out, err = capsys.readouterr()
    assert code == ExitCode.SOFTWARE == 70
    assert out == "Number(1.0)\n"
    assert "Runtime Error (Illegal operand for binary '*' expression)" in err


def test_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["a.lox", "b.lox"]) == ExitCode.USAGE
    assert "Usage" in capsys.readouterr().err


def test_missing_script(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "nope.lox")]) == ExitCode.NOINPUT
    assert "cannot read" in capsys.readouterr().err


def test_dump_tokens(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--tokens", _script(tmp_path, "print 1;")])
    out, _ = capsys.readouterr()
    assert code == 0
    assert out.splitlines() == [
        "Token(PRINT) @ 1:1",
        "Token(WHITESPACE, SPACE) @ 1:6",
        "Token(NUMBER, 1.0) @ 1:7",
        "Token(SEMICOLON) @ 1:8",
        "Token(EOF) @ 1:9",
    ]


def test_dump_ast(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--ast", _script(tmp_path, "print 1 + 2 * 3; var x = (true ? -a : nil); x;")])
    out, _ = capsys.readouterr()
    assert code == 0
    assert out.splitlines() == [
        "Print Statement: (+ 1 (* 2 3))",
        "Variable Statement: x = (group (true ? (- a) : nil))",
        "Expression Statement: x",
    ]


def test_repl_keeps_state_and_survives_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("var a = 2;\n1 +;\nprint a * 2;\n\nprint 99;\n"))
    assert main([]) == ExitCode.OK
    out, err = capsys.readouterr()
    assert "Number(4.0)" in out
    assert "Number(99.0)" not in out
    assert "Parsing Error" in err


def test_repl_ends_at_eof(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("print true;"))
    assert main([]) == ExitCode.OK
    assert "Boolean(true)" in capsys.readouterr().out


def test_run_file_api(tmp_path: Path) -> None:
    out: list[str] = []
    result = run_file(_script(tmp_path, "print 2 * 21;"), write_line=out.append)
    assert result.ok
    assert out == ["Number(42.0)"]


def test_run_source_stops_before_parsing_on_scan_errors() -> None:
    out: list[str] = []
    result = run_source('print 1; "open', write_line=out.append)
    assert result.stage is Stage.SCAN
    assert out == []


def test_run_source_stops_before_running_on_parse_errors() -> None:
    out: list[str] = []
    result = run_source("print 1; print;", write_line=out.append)
    assert result.stage is Stage.PARSE
    assert out == []


def test_dump_ast_of_long_operator_chain(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = "print " + " + ".join(["1"] * 3000) + ";"
    code = main(["--ast", _script(tmp_path, src)])
    _, err = capsys.readouterr()
    assert code == ExitCode.DATAERR
    assert "Expression too deeply nested to display" in err


def test_run_long_operator_chain_exits_70(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = "print " + " + ".join(["1"] * 3000) + ";"
    code = main([_script(tmp_path, src)])
    _, err = capsys.readouterr()
    assert code == ExitCode.SOFTWARE
    assert "Runtime Error (Expression too deeply nested to evaluate)" in err
