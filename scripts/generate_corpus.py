"""Write a generated Lox corpus along with what each program formats to and prints.

For every `case_NNNNNN.lox` the output directory also gets:

  case_NNNNNN.fmt.lox   the program as `format_program` renders it
  case_NNNNNN.out       printed lines, then the stage and diagnostics if the run failed
"""

from __future__ import annotations

import argparse
from pathlib import Path

from loxpy import Stage, parse_tokens, run_source, scan_source
from loxpy.format import format_program
from loxpy.testing import generate_corpus_files
from loxpy.tokens import TokenKind


def _formatted(src: str) -> str | None:
    tokens, errors = scan_source(src)
    if errors:
        return None
    tokens = [t for t in tokens if t.kind is not TokenKind.COMMENT]
    statements, errors = parse_tokens(tokens)
    if errors:
        return None
    return format_program(statements)


def _run_output(src: str) -> tuple[str, Stage | None]:
    lines: list[str] = []
    result = run_source(src, write_line=lines.append)
    if not result.ok:
        lines.append(f"-- {result.stage.name.lower()} failed --")
        lines.extend(str(e) for e in result.errors)
    return "".join(f"{line}\n" for line in lines), result.stage


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="generate_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=200)
    ap.add_argument("--out", default="tests/fixtures/generated_corpus")
    ap.add_argument("--sources-only", action="store_true", help="skip the .fmt.lox and .out files")
    args = ap.parse_args(argv)

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"
    out_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    for rel, src in generate_corpus_files(seed=args.seed, count=args.count):
        case = out_dir / rel
        case.write_text(src, encoding="utf-8")
        if args.sources_only:
            continue

        formatted = _formatted(src)
        if formatted is not None:
            case.with_name(f"{case.stem}.fmt.lox").write_text(formatted, encoding="utf-8")
        output, stage = _run_output(src)
        case.with_suffix(".out").write_text(output, encoding="utf-8")
        if stage is not None:
            failures += 1

    print(str(out_dir))
    if not args.sources_only:
        print(f"{args.count - failures} ran cleanly, {failures} stopped with diagnostics")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
