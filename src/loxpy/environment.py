from __future__ import annotations

from .errors import runtime_error
from .spans import SourceSpan
from .values import LiteralKind


class Environment:
    """A scope mapping variable names to values."""

    def __init__(self, enclosing: Environment | None = None) -> None:
        self.enclosing = enclosing
        self.values: dict[str, LiteralKind] = {}

    def define(self, name: str, value: LiteralKind) -> None:
        # Redefinition replaces the previous binding.
        self.values[name] = value

    def contains(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.enclosing is not None and self.enclosing.contains(name)

    def get(self, name: str, span: SourceSpan | None = None) -> LiteralKind:
        env: Environment | None = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.enclosing
        raise runtime_error("Undefined variable", span, subject=name)
