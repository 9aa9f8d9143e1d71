from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from loxpy.format import format_program
from loxpy.lexer import scan
from loxpy.parser import parse
from loxpy.spans import SourceText
from loxpy.tokens import TokenKind


# Every symbol here lexes without error, alone or in any combination (no quotes).
_CLEAN_ALPHABET = list("abxyz_019 \t\r\n.+-*/!=<>(){},;?:\u00e9\u03bb")

_clean_sources = st.text(alphabet=_CLEAN_ALPHABET, max_size=80)


@given(st.text(max_size=200))
@settings(max_examples=300, suppress_health_check=[HealthCheck.too_slow])
def test_scan_always_ends_with_eof(src: str) -> None:
    tokens, _ = scan(src)
    assert tokens
    assert tokens[-1].kind is TokenKind.EOF
    assert all(t.kind is not TokenKind.EOF for t in tokens[:-1])
    assert tokens[-1].span.end.index == len(SourceText(src))


@given(_clean_sources)
@settings(max_examples=300)
def test_token_spans_reconstruct_source(src: str) -> None:
    text = SourceText(src)
    tokens, errors = scan(text)
    assert not errors
    assert "".join(text.text_of(t.span) for t in tokens[:-1]) == src


@given(_clean_sources)
@settings(max_examples=300)
def test_token_indices_are_monotonic(src: str) -> None:
    tokens, _ = scan(src)
    for prev, cur in zip(tokens, tokens[1:]):
        assert prev.span.end == cur.span.start
        assert cur.span.start.index <= cur.span.end.index


@given(_clean_sources)
@settings(max_examples=300)
def test_parse_terminates_with_bounded_statement_count(src: str) -> None:
    tokens, _ = scan(src)
    semicolons = sum(1 for t in tokens if t.kind is TokenKind.SEMICOLON)
    statements, errors = parse(tokens)
    assert len(statements) <= semicolons
    assert len(errors) <= len(tokens)


_atoms = st.sampled_from(
    [
        "1",
        "2.5",
        "10000000000000000",
        "0.0000001",
        "123456789012345678901234567890",
        "true",
        "false",
        "nil",
        '"s"',
        "x",
    ]
)


@st.composite
def _expressions(draw, depth: int = 3) -> str:
    if depth == 0 or draw(st.booleans()):
        return draw(_atoms)
    k = draw(st.integers(min_value=0, max_value=3))
    if k == 0:
        op = draw(st.sampled_from(["+", "-", "*", "/", "==", "!=", "<", ">=", ">", "<="]))
        return f"{draw(_expressions(depth - 1))} {op} {draw(_expressions(depth - 1))}"
    if k == 1:
        return f"({draw(_expressions(depth - 1))})"
    if k == 2:
        return draw(st.sampled_from(["-", "!"])) + draw(_expressions(depth - 1))
    return f"({draw(_expressions(depth - 1))} ? {draw(_expressions(depth - 1))} : {draw(_expressions(depth - 1))})"


@given(st.lists(_expressions(), min_size=1, max_size=5))
@settings(max_examples=200)
def test_format_reparses_to_same_tree(exprs: list[str]) -> None:
    src = "".join(f"print {e};\n" for e in exprs)
    tokens, _ = scan(src)
    statements, errors = parse(tokens)
    assert not errors

    formatted = format_program(statements)
    tokens2, _ = scan(formatted)
    statements2, errors2 = parse(tokens2)
    assert not errors2
    assert statements2 == statements
    assert format_program(statements2) == formatted
