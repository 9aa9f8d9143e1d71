from __future__ import annotations

from loxpy import run_source
from loxpy.errors import ErrorKind, ErrorLog, LoxError, parsing_error, runtime_error, scanning_error
from loxpy.lexer import scan
from loxpy.parser import parse
from loxpy.spans import SourceLocation, SourceSpan


def test_scanning_error_display() -> None:
    _, errors = scan("1 + @")
    assert [str(e) for e in errors] == ["[line: 1, col: 5] Scanning Error (Unexpected character): @"]


def test_unterminated_string_display() -> None:
    _, errors = scan('\n  "abc')
    assert str(errors[0]) == "[line: 2, col: 3] Scanning Error (Unterminated String)"


def test_parsing_error_display() -> None:
    tokens, _ = scan("1 2;\nprint 1")
    _, errors = parse(tokens)
    assert errors.render() == (
        "[line: 1, col: 3] Parsing Error (Expected ';', instead found '2')\n"
        "[line: 2, col: 8] Parsing Error (Reached end of file while expecting ';')"
    )


def test_runtime_error_display() -> None:
    result = run_source("\n-nil;", write_line=lambda _: None)
    assert str(result.errors[0]) == "[line: 2, col: 1] Runtime Error (Illegal operand for unary '-' expression): Nil"


def test_display_without_location() -> None:
    assert str(runtime_error("boom")) == "Runtime Error (boom)"
    assert str(parsing_error("bad", subject="x")) == "Parsing Error (bad): x"


def test_display_with_location() -> None:
    loc = SourceLocation(line=3, column=7, index=20)
    err = scanning_error("Unexpected character", SourceSpan(loc, loc.advance("$")), subject="$")
    assert str(err) == "[line: 3, col: 7] Scanning Error (Unexpected character): $"


def test_error_log_is_ordered_and_append_only() -> None:
    log = ErrorLog()
    assert not log
    assert len(log) == 0

    log.push(scanning_error("first"))
    log.extend([parsing_error("second"), runtime_error("third")])
    assert log
    assert len(log) == 3
    assert [e.message for e in log] == ["first", "second", "third"]
    assert log.kinds() == [ErrorKind.SCANNING, ErrorKind.PARSING, ErrorKind.RUNTIME]
    assert log.render().splitlines()[0] == "Scanning Error (first)"


def test_lox_error_is_an_exception() -> None:
    err = LoxError(ErrorKind.RUNTIME, "boom")
    assert isinstance(err, Exception)
    assert err.subject is None
    assert err.span is None
