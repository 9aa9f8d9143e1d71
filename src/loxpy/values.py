"""Runtime values.

The same closed set of variants doubles as the payload of literal
expressions. Values of different variants never compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass

from .tokens import format_number


_ESCAPES = {"\t": "\\t", "\r": "\\r", "\n": "\\n", "\\": "\\\\", '"': '\\"', "\0": "\\0"}


def _escape_debug(text: str) -> str:
    out: list[str] = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch < " " or ch == "\x7f":
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return "".join(out)


@dataclass(frozen=True, slots=True)
class Number:
    value: float

    def __repr__(self) -> str:
        if self.value != self.value:
            return "Number(NaN)"
        text = repr(self.value)
        if "e" in text:
            # 1e+16 -> 1e16, 1e-07 -> 1e-7
            mantissa, exponent = text.split("e")
            text = f"{mantissa}e{int(exponent)}"
        return f"Number({text})"

    def display(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, slots=True)
class String:
    value: str

    def __repr__(self) -> str:
        return f'String("{_escape_debug(self.value)}")'

    def display(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool

    def __repr__(self) -> str:
        return f"Boolean({'true' if self.value else 'false'})"

    def display(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Nil:
    def __repr__(self) -> str:
        return "Nil"

    def display(self) -> str:
        return "nil"


LiteralKind = Number | String | Boolean | Nil

NIL = Nil()
TRUE = Boolean(True)
FALSE = Boolean(False)


def truth_value(value: LiteralKind) -> bool | None:
    """Boolean view of a value, or None when the variant has no truthiness."""
    if isinstance(value, Boolean):
        return value.value
    if isinstance(value, Nil):
        return False
    return None


def is_equal(a: LiteralKind, b: LiteralKind) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, Number):
        # Dataclass equality compares tuples, which treats a NaN as equal to itself.
        return a.value == b.value
    return a == b
